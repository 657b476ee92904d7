"""Data models for the documentation hierarchy."""

from src.models.page_type import PageType, VersionStatus, PAGE_TYPES_IN_ORDER
from src.models.page_node import (
    PageNode,
    ProductNode,
    VersionNode,
    ManualNode,
    TopicNode,
)
from src.models.viewer import ViewerContext, ANONYMOUS

__all__ = [
    'PageType',
    'VersionStatus',
    'PAGE_TYPES_IN_ORDER',
    'PageNode',
    'ProductNode',
    'VersionNode',
    'ManualNode',
    'TopicNode',
    'ViewerContext',
    'ANONYMOUS',
]
