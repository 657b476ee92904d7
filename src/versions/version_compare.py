"""Semantic comparison of version strings.

Version strings are split into components at '.', '-', '_' and '+' and at
every boundary between digits and letters ("1.0rc1" -> 1, 0, rc, 1).
Components are compared left to right; the shorter sequence is padded
with zeros. Numbers compare numerically. Letter components are ranked
dev < alpha (a) < beta (b) < rc < number < pl (p), and unknown words
rank below dev, so "1.0rc1" < "1.0" < "1.0pl1".
"""

import re
from functools import cmp_to_key
from typing import List, Union

_COMPONENT_PATTERN = re.compile(r'\d+|[A-Za-z]+|#')

# Rank of a numeric component among the special words
_NUMBER_RANK = 4

_SPECIAL_RANKS = {
    'dev': 0,
    'alpha': 1,
    'a': 1,
    'beta': 2,
    'b': 2,
    'rc': 3,
    '#': _NUMBER_RANK,
    'pl': 5,
    'p': 5,
}

_UNKNOWN_RANK = -1

Component = Union[int, str]


def parse_version(version: str) -> List[Component]:
    """Split a version string into numeric and word components.

    Example:
        >>> parse_version("2.10-beta3")
        [2, 10, 'beta', 3]
    """
    components: List[Component] = []
    for token in _COMPONENT_PATTERN.findall(version.strip()):
        if token.isdigit():
            components.append(int(token))
        else:
            components.append(token.lower())
    return components


def _rank(component: Component) -> int:
    if isinstance(component, int):
        return _NUMBER_RANK
    return _SPECIAL_RANKS.get(component, _UNKNOWN_RANK)


def _compare_components(left: Component, right: Component) -> int:
    if isinstance(left, int) and isinstance(right, int):
        return (left > right) - (left < right)
    left_rank, right_rank = _rank(left), _rank(right)
    if left_rank != right_rank:
        return (left_rank > right_rank) - (left_rank < right_rank)
    if isinstance(left, str) and isinstance(right, str) and left_rank == _UNKNOWN_RANK:
        return (left > right) - (left < right)
    return 0


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings.

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right

    Example:
        >>> compare_versions("1.5", "1.10")
        -1
        >>> compare_versions("1.0", "1.0.0")
        0
    """
    left_parts = parse_version(left)
    right_parts = parse_version(right)
    length = max(len(left_parts), len(right_parts))
    left_parts += [0] * (length - len(left_parts))
    right_parts += [0] * (length - len(right_parts))
    for left_part, right_part in zip(left_parts, right_parts):
        result = _compare_components(left_part, right_part)
        if result != 0:
            return result
    return 0


def version_sort_key(version: str):
    """Sort key ordering version strings with compare_versions."""
    return cmp_to_key(compare_versions)(version)


def sort_versions(version_strings: List[str]) -> List[str]:
    """Sort version strings ascending.

    Versions that compare equal ("1.0" and "1.0.0") are ordered by their
    literal text so the result is reproducible.
    """
    return sorted(sorted(version_strings), key=version_sort_key)

