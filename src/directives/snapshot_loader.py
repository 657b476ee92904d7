"""YAML snapshot loading for property stores.

A snapshot describes a set of pages with their raw text and, optionally,
properties written verbatim:

    pages:
      Foo:
        text: "{{#zdocs_product:admins=Alice}}"
      Foo/1.0:
        text: "{{#zdocs_version:status=Released|manuals list=Guide}}"
      Foo/1.0/Guide:
        properties:
          ZDocsPageType: Manual
          ZDocsParentPage: Foo/1.0

When directive processing is enabled, directives found in page text are
applied level by level (products first, topics last) and, within a level,
from the oldest version to the newest, so inherited display names read
properties that have already been written.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from src.hierarchy.path_model import product_and_version_strings
from src.hierarchy.resolver import HierarchyResolver
from src.models.page_type import PageType
from src.property_store.errors import SnapshotError
from src.property_store.store import InMemoryPropertyStore
from src.versions.version_compare import version_sort_key
from .directive_processor import DirectiveProcessor, extract_directives

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Loads InMemoryPropertyStore instances from YAML snapshots."""

    @classmethod
    def load(
        cls,
        snapshot_path: str,
        product_pages: Optional[Iterable[str]] = None,
        process_directives: bool = True
    ) -> InMemoryPropertyStore:
        """Load a snapshot file.

        Args:
            snapshot_path: Path to the YAML snapshot
            product_pages: Registered product pages (for eligibility checks)
            process_directives: Apply directives found in page text

        Returns:
            Populated InMemoryPropertyStore

        Raises:
            SnapshotError: If the file cannot be read or is malformed
        """
        try:
            with open(snapshot_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise SnapshotError("Snapshot file not found", snapshot_path)
        except OSError as e:
            raise SnapshotError(str(e), snapshot_path)

        try:
            snapshot = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SnapshotError(f"Invalid YAML syntax: {str(e)}", snapshot_path)

        if snapshot is None:
            snapshot = {}
        if not isinstance(snapshot, dict):
            raise SnapshotError(
                f"Snapshot must be a YAML dictionary, got {type(snapshot).__name__}",
                snapshot_path
            )
        return cls.from_dict(snapshot, product_pages, process_directives, snapshot_path)

    @classmethod
    def from_dict(
        cls,
        snapshot: Dict[str, Any],
        product_pages: Optional[Iterable[str]] = None,
        process_directives: bool = True,
        snapshot_path: Optional[str] = None
    ) -> InMemoryPropertyStore:
        """Build a store from an already-parsed snapshot dictionary."""
        pages = snapshot.get('pages', {})
        if pages is None:
            pages = {}
        if not isinstance(pages, dict):
            raise SnapshotError("Field 'pages' must be a dictionary", snapshot_path)

        store = InMemoryPropertyStore()
        for page_id, page in pages.items():
            page_id = str(page_id)
            if page is None:
                page = {}
            if not isinstance(page, dict):
                raise SnapshotError(f"Page '{page_id}' must be a dictionary", snapshot_path)
            store.create_page(page_id, str(page.get('text') or ''))
            cls._write_properties(store, page_id, page.get('properties'), snapshot_path)

        if process_directives:
            cls.apply_directives(store, HierarchyResolver(store, product_pages))

        logger.info(f"Loaded {len(store.page_ids())} pages from snapshot")
        return store

    @classmethod
    def apply_directives(cls, store: InMemoryPropertyStore, resolver: HierarchyResolver) -> List[Tuple[str, str]]:
        """Apply every directive found in page text.

        Returns:
            (page id, message) for each page whose directive was rejected
        """
        processor = DirectiveProcessor(store, resolver)
        pending = []
        for page_id in store.page_ids():
            directives = extract_directives(store.get_text(page_id))
            if not directives:
                continue
            if len(directives) > 1:
                logger.warning(f"Page {page_id} has {len(directives)} directives; using the first")
            page_type, params = directives[0]
            pending.append((page_id, page_type, params))

        pending.sort(key=lambda item: cls._processing_order(item[0], item[1]))

        rejected = []
        for page_id, page_type, params in pending:
            message = processor.process(page_id, page_type, params)
            if message is not None:
                logger.warning(f"Directive on {page_id} rejected: {message}")
                rejected.append((page_id, message))
        return rejected

    @staticmethod
    def _processing_order(page_id: str, page_type: PageType):
        try:
            _, version_string = product_and_version_strings(page_id, page_type)
        except ValueError:
            version_string = None
        return (page_type.level, version_sort_key(version_string or ''), page_id)

    @staticmethod
    def _write_properties(
        store: InMemoryPropertyStore,
        page_id: str,
        properties: Any,
        snapshot_path: Optional[str]
    ) -> None:
        if properties is None:
            return
        if not isinstance(properties, dict):
            raise SnapshotError(f"Properties of page '{page_id}' must be a dictionary", snapshot_path)
        for key, value in properties.items():
            if isinstance(value, list):
                for item in value:
                    store.add(page_id, str(key), str(item))
            elif isinstance(value, bool):
                store.set(page_id, str(key), '1' if value else '0')
            elif value is not None:
                store.set(page_id, str(key), str(value))
