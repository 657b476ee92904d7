"""Bullet-template grammar for manual tables of contents.

A topics-list template is wiki bullet text, one entry per line:

    * Introduction
    ** Installing
    * ! Shared/Glossary

A line whose label is the local name of one of the manual's topics is
matched to that topic. A label starting with '!' references a standalone
topic by its full page id. Everything else passes through unchanged.

merge_template() is a pure function over (template text, topic names):
it needs no store, and is what TocBuilder renders from.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

BULLET_MARKERS = '*#'

# Leading markers, then the label with surrounding whitespace trimmed
_BULLET_LINE_PATTERN = re.compile(r'^([*#]+)\s*(.*?)\s*$')

STANDALONE_PREFIX = '!'


@dataclass
class TemplateLine:
    """One parsed template line.

    Attributes:
        raw: Original line text
        markers: Leading list markers ('' for a non-bullet line)
        label: Line text after the markers, trimmed
        topic: Local name of the topic matched to this line
        standalone_ref: Page id referenced with '!' syntax
    """
    raw: str
    markers: str = ""
    label: str = ""
    topic: Optional[str] = None
    standalone_ref: Optional[str] = None

    @property
    def is_bullet(self) -> bool:
        return bool(self.markers)

    @property
    def depth(self) -> int:
        return len(self.markers)


@dataclass
class TemplateMerge:
    """Result of merging a template against a manual's topic names.

    Attributes:
        lines: Parsed lines with topic matches and standalone references
        ordered_topics: Matched topic names in template order
        orphans: Topic names absent from the template, sorted
    """
    lines: List[TemplateLine] = field(default_factory=list)
    ordered_topics: List[str] = field(default_factory=list)
    orphans: List[str] = field(default_factory=list)


def starts_with_bullet(text: Optional[str]) -> bool:
    """Return True if template text is literal bullet markup.

    Anything else is taken to be the name of a page holding the template.
    """
    return bool(text) and text.lstrip()[:1] in BULLET_MARKERS


def parse_template(text: Optional[str]) -> List[TemplateLine]:
    """Split template text into lines and tokenize bullet lines."""
    lines = []
    for raw in (text or "").splitlines():
        match = _BULLET_LINE_PATTERN.match(raw)
        if match:
            lines.append(TemplateLine(raw=raw, markers=match.group(1), label=match.group(2)))
        else:
            lines.append(TemplateLine(raw=raw))
    return lines


def merge_template(text: Optional[str], topic_names: Iterable[str]) -> TemplateMerge:
    """Match a manual's topics against its template.

    Pass 1 assigns each topic to the first unmatched bullet line whose
    label equals the topic's local name; a topic is matched at most once.
    Pass 2 marks the remaining '!' lines as standalone references.

    Args:
        text: Template bullet text
        topic_names: Local names of the manual's topics

    Returns:
        TemplateMerge with the annotated lines, the matched topics in
        template order and the orphaned topics

    Example:
        >>> merge = merge_template("* Intro\\n* Setup", {"Intro", "Setup", "Extra"})
        >>> merge.ordered_topics, merge.orphans
        (['Intro', 'Setup'], ['Extra'])
    """
    lines = parse_template(text)
    pending = set(topic_names)

    # Sorted so duplicate labels resolve the same way on every run
    for name in sorted(pending):
        for line in lines:
            if line.is_bullet and line.topic is None and line.label == name:
                line.topic = name
                break

    for line in lines:
        if not line.is_bullet or line.topic is not None:
            continue
        if line.label.startswith(STANDALONE_PREFIX):
            reference = line.label[len(STANDALONE_PREFIX):].strip()
            if reference:
                line.standalone_ref = reference

    ordered = [line.topic for line in lines if line.topic is not None]
    orphans = sorted(pending - set(ordered))
    return TemplateMerge(lines=lines, ordered_topics=ordered, orphans=orphans)
