"""Directive processing and property store snapshots."""

from .directive_processor import (
    DirectiveProcessor,
    extract_directives,
    parse_directive_params,
    split_usernames,
)
from .snapshot_loader import SnapshotLoader

__all__ = [
    'DirectiveProcessor',
    'extract_directives',
    'parse_directive_params',
    'split_usernames',
    'SnapshotLoader',
]
