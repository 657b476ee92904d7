"""Directive processing: turning page directives into stored properties.

Pages declare their place in the hierarchy with a directive in their text:

    {{#zdocs_product:display name=|admins=|editors=|previewers=}}
    {{#zdocs_version:status=|manuals list=|inherit}}
    {{#zdocs_manual:display name=|topics list=|pagination|inherit}}
    {{#zdocs_topic:display name=|toc name=|inherit}}

Processing a directive validates the page's eligibility for the declared
type and writes the ZDocs* properties the resolution engines read.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from src.hierarchy.path_model import split_path
from src.hierarchy.resolver import HierarchyResolver
from src.inheritance.inheritance_engine import InheritanceEngine
from src.models.page_type import PageType
from src.models.viewer import CAPABILITY_ADMINISTER, ViewerContext
from src.property_store import keys
from src.property_store.store import InMemoryPropertyStore

logger = logging.getLogger(__name__)

_DIRECTIVE_PATTERN = re.compile(
    r'\{\{\s*#zdocs_(product|version|manual|topic)\s*(?::(.*?))?\}\}',
    re.DOTALL | re.IGNORECASE
)

# Inheritance lookups during processing must see every version
PROCESSOR_VIEWER = ViewerContext(name=None, capabilities=frozenset({CAPABILITY_ADMINISTER}))

_ROLE_PARAMS = {
    'admins': keys.PRODUCT_ADMIN,
    'editors': keys.PRODUCT_EDITOR,
    'previewers': keys.PRODUCT_PREVIEWER,
}


def extract_directives(text: Optional[str]) -> List[Tuple[PageType, List[str]]]:
    """Find zdocs directives in page text.

    Returns:
        List of (declared type, raw parameter strings), in text order

    Example:
        >>> extract_directives("{{#zdocs_manual:topics list=* A|pagination}}")
        [(<PageType.MANUAL: 'Manual'>, ['topics list=* A', 'pagination'])]
    """
    directives = []
    for match in _DIRECTIVE_PATTERN.finditer(text or ""):
        page_type = PageType(match.group(1).capitalize())
        raw_params = match.group(2)
        params = raw_params.split('|') if raw_params else []
        directives.append((page_type, params))
    return directives


def parse_directive_params(params: List[str]) -> Dict[str, Optional[str]]:
    """Split "name=value" parameters; bare names map to None.

    Example:
        >>> parse_directive_params(["status=Released", "inherit"])
        {'status': 'Released', 'inherit': None}
    """
    processed = {}
    for param in params:
        if '=' in param:
            name, value = param.split('=', 1)
            processed[name.strip()] = value.strip()
        elif param.strip():
            processed[param.strip()] = None
    return processed


def split_usernames(value: str) -> List[str]:
    """Split a comma-separated user list; underscores become spaces."""
    names = []
    for username in value.split(','):
        username = username.replace('_', ' ').strip()
        if username:
            names.append(username)
    return names


class DirectiveProcessor:
    """Applies page directives to a writable property store.

    Example:
        >>> processor = DirectiveProcessor(store, resolver)
        >>> processor.process("Foo/1.0", PageType.VERSION, ["status=Released"])
        >>> store.get("Foo/1.0", "ZDocsStatus")
        'Released'
    """

    def __init__(
        self,
        store: InMemoryPropertyStore,
        resolver: HierarchyResolver,
        inheritance: Optional[InheritanceEngine] = None
    ):
        self.store = store
        self.resolver = resolver
        self.inheritance = inheritance or InheritanceEngine(resolver)

    def process(self, page_id: str, page_type: PageType, params: List[str]) -> Optional[str]:
        """Process one directive for a page.

        Args:
            page_id: Page carrying the directive
            page_type: Type the directive declares
            params: Raw directive parameters

        Returns:
            Eligibility error message (nothing is written), or None on success
        """
        parent_id, this_name = split_path(page_id)
        message = self.resolver.check_eligibility(page_type, parent_id, page_id)
        if message is not None:
            return message

        processed = parse_directive_params(params)
        self.store.clear(page_id)
        self.store.set(page_id, keys.PAGE_TYPE, page_type.value)
        if page_type is not PageType.PRODUCT:
            self.store.set(page_id, keys.PARENT_PAGE, parent_id)

        if page_type is PageType.PRODUCT:
            self._process_product(page_id, processed)
        elif page_type is PageType.VERSION:
            self._process_version(page_id, processed)
        elif page_type is PageType.MANUAL:
            self._process_manual(page_id, this_name, processed)
        elif page_type is PageType.TOPIC:
            self._process_topic(page_id, this_name, processed)

        logger.debug(f"Processed {page_type.value} directive for {page_id}")
        return None

    def _process_product(self, page_id: str, params: Dict[str, Optional[str]]) -> None:
        display_name = params.get('display name') or page_id
        self.store.set(page_id, keys.DISPLAY_NAME, display_name)
        for param_name, key in _ROLE_PARAMS.items():
            value = params.get(param_name)
            if not value:
                continue
            for username in split_usernames(value):
                self.store.add(page_id, key, username)

    def _process_version(self, page_id: str, params: Dict[str, Optional[str]]) -> None:
        if self._flag(params, 'inherit'):
            self.store.set(page_id, keys.INHERIT, '1')
        if params.get('status'):
            self.store.set(page_id, keys.STATUS, params['status'])
        if params.get('manuals list') is not None:
            self.store.set(page_id, keys.MANUALS_LIST, params['manuals list'])

    def _process_manual(self, page_id: str, this_name: str, params: Dict[str, Optional[str]]) -> None:
        inherits = self._flag(params, 'inherit')
        if inherits:
            self.store.set(page_id, keys.INHERIT, '1')
        if params.get('topics list') is not None:
            self.store.set(page_id, keys.TOPICS_LIST, params['topics list'])
        if self._flag(params, 'pagination'):
            self.store.set(page_id, keys.PAGINATION, '1')

        display_name = params.get('display name')
        if not display_name and inherits:
            display_name = self._inherited(page_id, PageType.MANUAL, keys.DISPLAY_NAME)
        self.store.set(page_id, keys.DISPLAY_NAME, display_name or this_name)

    def _process_topic(self, page_id: str, this_name: str, params: Dict[str, Optional[str]]) -> None:
        inherits = self._flag(params, 'inherit')
        if inherits:
            self.store.set(page_id, keys.INHERIT, '1')

        display_name = params.get('display name')
        if not display_name and inherits:
            display_name = self._inherited(page_id, PageType.TOPIC, keys.DISPLAY_NAME)
        display_name = display_name or this_name
        self.store.set(page_id, keys.DISPLAY_NAME, display_name)

        toc_name = params.get('toc name')
        if not toc_name and inherits:
            toc_name = self._inherited(page_id, PageType.TOPIC, keys.TOC_NAME)
        self.store.set(page_id, keys.TOC_NAME, toc_name or display_name)

    def _inherited(self, page_id: str, page_type: PageType, key: str) -> Optional[str]:
        node = self.resolver.build_as(page_id, page_type)
        return self.inheritance.inherited_param(node, key, PROCESSOR_VIEWER)

    @staticmethod
    def _flag(params: Dict[str, Optional[str]], name: str) -> bool:
        # Flags are bare parameters: "inherit", not "inherit=..."
        return name in params and params[name] is None
