"""Typed exception hierarchy for hierarchy resolution errors.

Configuration problems found while rendering (ineligible pages, unmatched
list entries) are reported as messages, not raised. The exceptions here
cover failures that must abort the operation that hit them.
"""

from typing import List, Optional

from src.property_store.errors import ZDocsError


class HierarchyError(ZDocsError):
    """Base exception for all hierarchy resolution errors."""
    pass


class UnknownPageTypeError(HierarchyError):
    """Raised when a page is required to be typed but has no valid type tag."""

    def __init__(self, page_id: str, type_tag: Optional[str] = None):
        if type_tag:
            message = f"Page {page_id} has unknown page type '{type_tag}'"
        else:
            message = f"Page {page_id} has no page type"
        super().__init__(message)
        self.page_id = page_id
        self.type_tag = type_tag


class InheritanceError(HierarchyError):
    """Base exception for inheritance resolution failures."""
    pass


class InheritanceChainExhaustedError(InheritanceError):
    """Raised when a page inherits but no earlier version supplies content.

    Every equivalent page in the lineage declares inheritance, so there is
    no authoritative source. This indicates a broken configuration across
    the whole version lineage.
    """

    def __init__(self, page_id: str, versions_checked: Optional[List[str]] = None):
        self.versions_checked = list(versions_checked or [])
        if self.versions_checked:
            checked = ', '.join(self.versions_checked)
            message = (
                f"There is no version from which to inherit for page {page_id} "
                f"(checked: {checked})"
            )
        else:
            message = f"There is no version from which to inherit for page {page_id}"
        super().__init__(message)
        self.page_id = page_id
