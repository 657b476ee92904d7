"""Table-of-contents construction for manuals.

This module merges a manual's topics-list template with the topics that
actually exist under the manual, renders the result as nested lists, and
reports topics missing from the template ("orphans"). The ordered topic
sequence it produces drives previous/next navigation between topics.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from src.hierarchy.path_model import join_path, product_and_version_strings
from src.hierarchy.resolver import HierarchyResolver
from src.inheritance.inheritance_engine import InheritanceEngine
from src.models.page_node import ManualNode, TopicNode
from src.models.page_type import PageType
from src.models.viewer import ViewerContext
from src.property_store import keys
from src.rendering.html_renderer import Renderer
from src.rendering.models import BlockLine, Link
from .template_parser import merge_template, starts_with_bullet

logger = logging.getLogger(__name__)

ORPHAN_WARNING = "The following topics belong to this manual but are not in its table of contents: "


@dataclass
class TocResult:
    """A manual's built table of contents.

    Attributes:
        markup: Rendered TOC (nested lists)
        ordered_topics: Local names of matched topics, in TOC order
        orphans: Local names of topics missing from the template
        orphan_links: Links to the orphaned topics, for warnings
    """
    markup: str = ""
    ordered_topics: List[str] = field(default_factory=list)
    orphans: List[str] = field(default_factory=list)
    orphan_links: List[Link] = field(default_factory=list)


class TocBuilder:
    """Builds and caches tables of contents for manuals.

    The result is memoized on the ManualNode instance, so repeated calls
    during one render (TOC, sidebar, prev/next links) build it once.

    Example:
        >>> builder = TocBuilder(resolver, engine, HtmlRenderer())
        >>> builder.build(manual, viewer).ordered_topics
        ['Intro', 'Setup']
    """

    def __init__(
        self,
        resolver: HierarchyResolver,
        inheritance: InheritanceEngine,
        renderer: Renderer
    ):
        self.resolver = resolver
        self.inheritance = inheritance
        self.renderer = renderer

    def template_text(self, manual: ManualNode, viewer: ViewerContext) -> str:
        """Return the manual's template as bullet text.

        The (possibly inherited) topics list is either literal bullet text
        or the name of a page whose raw text is the template.
        """
        topics_list = self.inheritance.resolve_inherited_param(manual, keys.TOPICS_LIST, viewer)
        if topics_list is None:
            logger.debug(f"Manual {manual.page_id} has no topics list")
            return ""
        if starts_with_bullet(topics_list):
            return topics_list

        template_page = topics_list.strip()
        text = self.resolver.store.get_text(template_page)
        if text is None:
            logger.warning(
                f"Topics list page '{template_page}' for manual {manual.page_id} does not exist"
            )
            return ""
        return text

    def topics(self, manual: ManualNode) -> Dict[str, TopicNode]:
        """Return the manual's child topics keyed by local name."""
        return {
            topic.local_name: topic
            for topic in (
                self.resolver.build_topic(topic_id)
                for topic_id in self.resolver.children_of(manual.page_id, PageType.TOPIC)
            )
        }

    def toc_link(self, topic: TopicNode) -> Link:
        """Link to a topic as shown in a table of contents.

        Standalone topics carry their logical manual in the query string.
        """
        text = topic.toc_name or topic.display_name or topic.local_name
        query = {}
        if topic.standalone and topic.manual_id is not None:
            product_name, version_string = product_and_version_strings(
                topic.manual_id, PageType.MANUAL
            )
            query = {
                'product': product_name,
                'version': version_string,
                'manual': topic.manual_local_name,
            }
        return Link(page_id=topic.page_id, text=text, query=query)

    def build(self, manual: ManualNode, viewer: ViewerContext) -> TocResult:
        """Build (or return the cached) table of contents for a manual."""
        if manual.toc_cache is not None:
            return manual.toc_cache

        topics = self.topics(manual)
        merge = merge_template(self.template_text(manual, viewer), topics.keys())

        block_lines = []
        for line in merge.lines:
            if line.topic is not None:
                logger.debug(f"Matched topic {line.topic} in manual {manual.page_id}")
                block_lines.append(BlockLine(line.markers, self.toc_link(topics[line.topic])))
            elif line.standalone_ref is not None:
                standalone = self.resolver.new_standalone_topic(line.standalone_ref, manual)
                if standalone is None:
                    logger.warning(
                        f"Standalone topic '{line.standalone_ref}' in manual "
                        f"{manual.page_id} is not a topic page"
                    )
                    block_lines.append(BlockLine(line.markers, line.label))
                else:
                    block_lines.append(BlockLine(line.markers, self.toc_link(standalone)))
            elif line.is_bullet:
                block_lines.append(BlockLine(line.markers, line.label))
            else:
                block_lines.append(BlockLine("", line.raw))

        if merge.orphans:
            logger.warning(
                f"Manual {manual.page_id} has topics missing from its table of contents: "
                f"{', '.join(merge.orphans)}"
            )

        result = TocResult(
            markup=self.renderer.render_blocks(block_lines),
            ordered_topics=merge.ordered_topics,
            orphans=merge.orphans,
            orphan_links=[self.toc_link(topics[name]) for name in merge.orphans],
        )
        manual.toc_cache = result
        return result

    def orphan_warning(self, result: TocResult) -> Optional[str]:
        """Render the non-fatal orphan warning, or None if there are none."""
        if not result.orphans:
            return None
        return self.renderer.render_warning(ORPHAN_WARNING, result.orphan_links)

    def table_of_contents(self, manual: ManualNode, viewer: ViewerContext, show_errors: bool = False) -> str:
        """Return the rendered TOC, preceded by the orphan warning if requested."""
        result = self.build(manual, viewer)
        if show_errors:
            warning = self.orphan_warning(result)
            if warning is not None:
                return warning + result.markup
        return result.markup

    def previous_and_next(
        self,
        manual: ManualNode,
        topic: TopicNode,
        viewer: ViewerContext
    ) -> Tuple[Optional[TopicNode], Optional[TopicNode]]:
        """Return the topics before and after `topic` in the manual's TOC.

        Either side is None at a boundary, and both are None if the topic is
        not in the TOC.
        """
        ordered = self.build(manual, viewer).ordered_topics
        if topic.local_name not in ordered:
            return None, None
        position = ordered.index(topic.local_name)

        previous_topic = None
        next_topic = None
        if position > 0:
            previous_topic = self.resolver.build_topic(join_path(manual.page_id, ordered[position - 1]))
        if position < len(ordered) - 1:
            next_topic = self.resolver.build_topic(join_path(manual.page_id, ordered[position + 1]))
        return previous_topic, next_topic

    def navigation(
        self,
        topic: TopicNode,
        viewer: ViewerContext
    ) -> Tuple[Optional[TopicNode], Optional[TopicNode]]:
        """Previous/next topics, shown only when the owning manual paginates."""
        manual = self.resolver.manual_of(topic)
        if manual is None:
            return None, None
        pagination = self.inheritance.resolve_inherited_param(manual, keys.PAGINATION, viewer)
        if not keys.is_flag_set(pagination):
            return None, None
        return self.previous_and_next(manual, topic, viewer)
