"""Data models for CLI operations."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Command completed successfully
    - GENERAL_ERROR (1): Unknown page, wrong page type, unexpected failure
    - CONFIG_ERROR (2): Unreadable or invalid configuration, snapshot or
      page eligibility
    - INHERITANCE_ERROR (3): A page inherits but no version can supply content
    - PERMISSION_DENIED (4): The viewer may not read the page

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 2
    INHERITANCE_ERROR = 3
    PERMISSION_DENIED = 4


@dataclass
class ZDocsConfig:
    """Configuration loaded from .zdocs/config.yaml.

    Attributes:
        product_pages: Registered product pages; only these may be declared
                       Product pages
        store_path: Property store snapshot, relative to the config file
        link_prefix: URL prefix for rendered page links
        process_directives: Apply {{#zdocs_...}} directives from page text

    Example:
        >>> config = ZDocsConfig(product_pages=["Foo"], store_path="pages.yaml")
    """
    product_pages: List[str] = field(default_factory=list)
    store_path: str = ""
    link_prefix: str = "/wiki/"
    process_directives: bool = True
