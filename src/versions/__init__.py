"""Version enumeration and semantic ordering."""

from .version_compare import compare_versions, parse_version, sort_versions, version_sort_key
from .version_index import VersionIndex

__all__ = [
    'compare_versions',
    'parse_version',
    'sort_versions',
    'version_sort_key',
    'VersionIndex',
]
