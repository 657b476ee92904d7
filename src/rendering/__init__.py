"""Rendering collaborator: links, nested lists and warning blocks."""

from .html_renderer import HtmlRenderer, Renderer
from .models import BlockLine, Link

__all__ = ['HtmlRenderer', 'Renderer', 'BlockLine', 'Link']
