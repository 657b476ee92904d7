"""Viewer context threaded through every resolution call."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

# Global capability names
CAPABILITY_ADMINISTER = 'administer'
CAPABILITY_EDIT = 'edit'
CAPABILITY_PREVIEW = 'preview'

KNOWN_CAPABILITIES = frozenset({
    CAPABILITY_ADMINISTER,
    CAPABILITY_EDIT,
    CAPABILITY_PREVIEW,
})


@dataclass(frozen=True)
class ViewerContext:
    """Who is looking at a page, and how they addressed it.

    Replaces ambient request state: the viewer's identity, their global
    capabilities and the request's query parameters are passed explicitly
    to every call that needs them.

    Attributes:
        name: Identity string matched against product role lists
              (None for anonymous viewers)
        capabilities: Global capabilities held by the viewer
                      (subset of administer/edit/preview)
        query: Request query parameters (product/version/manual select
               standalone topic addressing)

    Example:
        >>> viewer = ViewerContext(name="Alice", capabilities=frozenset({"edit"}))
        >>> viewer.has_capability("edit")
        True
    """
    name: Optional[str] = None
    capabilities: FrozenSet[str] = frozenset()
    query: Dict[str, str] = field(default_factory=dict)

    def has_capability(self, capability: str) -> bool:
        return capability in self.capabilities

    def standalone_manual_id(self) -> Optional[str]:
        """Manual page id named by the query string, if fully specified."""
        product = self.query.get('product')
        version = self.query.get('version')
        manual = self.query.get('manual')
        if not (product and version and manual):
            return None
        return f"{product}/{version}/{manual}"

    def __hash__(self) -> int:
        return hash((self.name, self.capabilities, tuple(sorted(self.query.items()))))


ANONYMOUS = ViewerContext()
