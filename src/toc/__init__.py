"""Table-of-contents construction and manuals listings."""

from .template_parser import TemplateLine, TemplateMerge, merge_template, parse_template
from .toc_builder import TocBuilder, TocResult
from .manuals_list import ManualsListBuilder, ManualsListEntry, ManualsListing

__all__ = [
    'TemplateLine',
    'TemplateMerge',
    'merge_template',
    'parse_template',
    'TocBuilder',
    'TocResult',
    'ManualsListBuilder',
    'ManualsListEntry',
    'ManualsListing',
]
