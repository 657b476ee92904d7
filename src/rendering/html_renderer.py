"""HTML rendering of links, nested lists and warning blocks.

Markup is built with BeautifulSoup tags rather than string concatenation,
so page names and labels are always escaped.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union
from urllib.parse import quote, urlencode

from bs4 import BeautifulSoup, Tag

from .models import BlockLine, Link

logger = logging.getLogger(__name__)

_LIST_TAGS = {'*': 'ul', '#': 'ol'}


class Renderer(ABC):
    """Rendering collaborator used by the TOC builder and listings."""

    @abstractmethod
    def render_link(self, link: Link) -> str:
        """Return markup for a link to a page."""

    @abstractmethod
    def render_blocks(self, lines: Sequence[BlockLine]) -> str:
        """Return block-structured markup (nested lists) for bullet lines."""

    @abstractmethod
    def render_warning(self, message: str, items: Sequence[Union[str, Link]] = ()) -> str:
        """Return a visible, non-fatal warning block."""

    @abstractmethod
    def render_list(self, items: Sequence[Union[str, Link]], css_class: Optional[str] = None) -> str:
        """Return a flat list of items."""


class HtmlRenderer(Renderer):
    """Renders wiki-style content as HTML.

    Example:
        >>> renderer = HtmlRenderer(link_prefix="/wiki/")
        >>> renderer.render_link(Link("Foo/1.0", "1.0"))
        '<a href="/wiki/Foo/1.0" title="Foo/1.0">1.0</a>'
    """

    def __init__(self, link_prefix: str = "/wiki/"):
        """Initialize the renderer.

        Args:
            link_prefix: URL prefix prepended to page identifiers in links
        """
        self.link_prefix = link_prefix
        self.parser = "lxml"

    def href_for(self, link: Link) -> str:
        href = self.link_prefix + quote(link.page_id.replace(' ', '_'), safe='/')
        if link.query:
            href += '?' + urlencode(sorted(link.query.items()))
        return href

    def render_link(self, link: Link) -> str:
        soup = self._soup()
        return str(self._link_tag(soup, link))

    def render_blocks(self, lines: Sequence[BlockLine]) -> str:
        """Turn bullet lines into nested <ul>/<ol> lists.

        Consecutive lines share list elements for as long as their marker
        prefixes agree; a deeper marker opens a list inside the previous
        item. Non-bullet lines close all open lists and become paragraphs.
        """
        soup = self._soup()
        container = soup.new_tag('div')
        # Each entry is (marker char, list tag, last item appended to it)
        stack: List[list] = []

        for line in lines:
            if not line.is_list_item:
                stack = []
                if isinstance(line.content, Link) or line.content.strip():
                    paragraph = soup.new_tag('p')
                    self._append_content(soup, paragraph, line.content)
                    container.append(paragraph)
                continue

            markers = line.markers
            common = 0
            while (common < len(stack) and common < len(markers)
                   and stack[common][0] == markers[common]):
                common += 1
            del stack[common:]

            while len(stack) < len(markers):
                marker = markers[len(stack)]
                list_tag = soup.new_tag(_LIST_TAGS.get(marker, 'ul'))
                if stack:
                    parent_item = stack[-1][2]
                    if parent_item is None:
                        parent_item = soup.new_tag('li')
                        stack[-1][1].append(parent_item)
                        stack[-1][2] = parent_item
                    parent_item.append(list_tag)
                else:
                    container.append(list_tag)
                stack.append([marker, list_tag, None])

            item = soup.new_tag('li')
            self._append_content(soup, item, line.content)
            stack[-1][1].append(item)
            stack[-1][2] = item

        return self._inner(container)

    def render_warning(self, message: str, items: Sequence[Union[str, Link]] = ()) -> str:
        soup = self._soup()
        box = soup.new_tag('div', attrs={'class': 'warningbox'})
        box.append(message)
        for position, item in enumerate(items):
            if position:
                box.append(', ')
            self._append_content(soup, box, item)
        return str(box)

    def render_list(self, items: Sequence[Union[str, Link]], css_class: Optional[str] = None) -> str:
        soup = self._soup()
        attrs = {'class': css_class} if css_class else {}
        list_tag = soup.new_tag('ul', attrs=attrs)
        for item in items:
            list_item = soup.new_tag('li')
            self._append_content(soup, list_item, item)
            list_tag.append(list_item)
        return str(list_tag)

    def _soup(self) -> BeautifulSoup:
        return BeautifulSoup("", self.parser)

    def _link_tag(self, soup: BeautifulSoup, link: Link) -> Tag:
        anchor = soup.new_tag('a', attrs={'href': self.href_for(link), 'title': link.page_id})
        anchor.string = link.text
        return anchor

    def _append_content(self, soup: BeautifulSoup, parent: Tag, content: Union[str, Link]) -> None:
        if isinstance(content, Link):
            parent.append(self._link_tag(soup, content))
        else:
            parent.append(content)

    @staticmethod
    def _inner(container: Tag) -> str:
        return ''.join(str(child) for child in container.contents)
