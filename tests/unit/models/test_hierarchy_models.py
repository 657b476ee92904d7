"""Unit tests for models package."""

import pytest

from src.models.page_node import ManualNode, PageNode, ProductNode, TopicNode, VersionNode
from src.models.page_type import PAGE_TYPES_IN_ORDER, PageType, VersionStatus
from src.models.viewer import ANONYMOUS, ViewerContext


class TestPageType:
    """Test cases for PageType."""

    def test_levels_follow_structural_order(self):
        assert [page_type.level for page_type in PAGE_TYPES_IN_ORDER] == [0, 1, 2, 3]

    def test_expected_parent(self):
        assert PageType.PRODUCT.expected_parent is None
        assert PageType.VERSION.expected_parent is PageType.PRODUCT
        assert PageType.MANUAL.expected_parent is PageType.VERSION
        assert PageType.TOPIC.expected_parent is PageType.MANUAL

    @pytest.mark.parametrize("tag, expected", [
        ("Manual", PageType.MANUAL),
        (" Topic ", PageType.TOPIC),
        ("manual", None),
        ("Chapter", None),
        (None, None),
    ])
    def test_from_tag(self, tag, expected):
        assert PageType.from_tag(tag) is expected


class TestVersionStatus:
    """Test cases for VersionStatus.from_value()."""

    @pytest.mark.parametrize("value, expected", [
        ("Released", VersionStatus.RELEASED),
        (" Unreleased", VersionStatus.UNRELEASED),
        ("Closed", VersionStatus.CLOSED),
        ("", VersionStatus.OTHER),
        ("Beta", VersionStatus.OTHER),
        (None, VersionStatus.OTHER),
    ])
    def test_from_value(self, value, expected):
        assert VersionStatus.from_value(value) is expected


class TestPageNodes:
    """Test cases for node dataclasses."""

    def test_local_name(self):
        node = PageNode(page_id="Foo/1.0/Guide", page_type=PageType.MANUAL)

        assert node.local_name == "Guide"

    def test_product_local_name_is_full_id(self):
        product = ProductNode(page_id="Acme/Cloud")

        assert product.local_name == "Acme/Cloud"
        assert product.page_type is PageType.PRODUCT

    def test_version_string(self):
        assert VersionNode(page_id="Foo/1.10").version_string == "1.10"

    def test_topic_manual_local_name(self):
        topic = TopicNode(page_id="Shared/Glossary", manual_id="Foo/1.0/Guide")

        assert topic.manual_local_name == "Guide"
        assert TopicNode(page_id="Shared").manual_local_name is None

    def test_toc_cache_ignored_in_equality(self):
        first = ManualNode(page_id="Foo/1.0/Guide")
        second = ManualNode(page_id="Foo/1.0/Guide")
        first.toc_cache = object()

        assert first == second


class TestViewerContext:
    """Test cases for ViewerContext."""

    def test_anonymous(self):
        assert ANONYMOUS.name is None
        assert ANONYMOUS.has_capability("edit") is False
        assert ANONYMOUS.standalone_manual_id() is None

    def test_standalone_manual_requires_all_three_params(self):
        assert ViewerContext(query={"product": "Foo", "version": "1.0"}).standalone_manual_id() is None
        viewer = ViewerContext(query={"product": "Acme/Cloud", "version": "2.0", "manual": "Guide"})
        assert viewer.standalone_manual_id() == "Acme/Cloud/2.0/Guide"

    def test_hashable_with_query(self):
        first = ViewerContext(name="Alice", query={"a": "1"})
        second = ViewerContext(name="Alice", query={"a": "1"})

        assert first == second
        assert hash(first) == hash(second)
