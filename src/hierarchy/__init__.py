"""Page identifiers, typed node construction and eligibility checks."""

from .errors import (
    HierarchyError,
    UnknownPageTypeError,
    InheritanceError,
    InheritanceChainExhaustedError,
)
from .path_model import split_path, join_path, local_name, parent_of, product_and_version_strings
from .resolver import HierarchyResolver

__all__ = [
    'HierarchyError',
    'UnknownPageTypeError',
    'InheritanceError',
    'InheritanceChainExhaustedError',
    'split_path',
    'join_path',
    'local_name',
    'parent_of',
    'product_and_version_strings',
    'HierarchyResolver',
]
