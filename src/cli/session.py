"""Wiring of the resolution engines for one CLI invocation.

A session loads the configuration and the property store snapshot it
names, then builds the resolver and engines over that store. Nothing is
shared between sessions.
"""

import logging
import os
from typing import Optional

from src.directives.snapshot_loader import SnapshotLoader
from src.hierarchy.resolver import HierarchyResolver
from src.inheritance.inheritance_engine import InheritanceEngine
from src.permissions.page_permissions import PagePermissions
from src.property_store.store import PropertyStore
from src.rendering.html_renderer import HtmlRenderer
from src.toc.manuals_list import ManualsListBuilder
from src.toc.toc_builder import TocBuilder
from src.versions.version_index import VersionIndex
from .config import ConfigLoader
from .errors import ConfigNotFoundError
from .models import ZDocsConfig

logger = logging.getLogger(__name__)


class ZDocsSession:
    """Resolver, engines and renderer over one loaded property store.

    Example:
        >>> session = ZDocsSession.open(".zdocs/config.yaml")
        >>> manual = session.resolver.require("Foo/1.0/Guide")
        >>> session.toc.build(manual, viewer).ordered_topics
        ['Intro', 'Setup']
    """

    def __init__(self, config: ZDocsConfig, store: PropertyStore):
        self.config = config
        self.store = store
        self.resolver = HierarchyResolver(store, config.product_pages)
        self.version_index = VersionIndex(self.resolver)
        self.inheritance = InheritanceEngine(self.resolver, self.version_index)
        self.renderer = HtmlRenderer(config.link_prefix)
        self.toc = TocBuilder(self.resolver, self.inheritance, self.renderer)
        self.manuals = ManualsListBuilder(self.resolver, self.inheritance, self.renderer)
        self.permissions = PagePermissions(self.resolver)

    @classmethod
    def open(cls, config_path: Optional[str] = None) -> 'ZDocsSession':
        """Load configuration and snapshot, and build a session.

        Args:
            config_path: Configuration file (default .zdocs/config.yaml)

        Raises:
            ConfigNotFoundError: If the configuration file does not exist
            ConfigError: If the configuration is invalid
            FilesystemError: If the configuration cannot be read
            SnapshotError: If the snapshot cannot be read or is malformed
        """
        config_path = config_path or ConfigLoader.default_path()
        if not os.path.exists(config_path):
            raise ConfigNotFoundError(config_path)

        config = ConfigLoader.load(config_path)
        store_path = cls.resolve_store_path(config_path, config.store_path)
        logger.info(f"Loading property store snapshot from {store_path}")
        store = SnapshotLoader.load(store_path, config.product_pages, config.process_directives)
        return cls(config, store)

    @staticmethod
    def resolve_store_path(config_path: str, store_path: str) -> str:
        """Resolve a relative snapshot path against the config file's directory."""
        if os.path.isabs(store_path):
            return store_path
        return os.path.join(os.path.dirname(config_path), store_path)
