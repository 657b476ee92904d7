"""Unit tests for hierarchy.resolver module."""

import pytest

from src.hierarchy.errors import UnknownPageTypeError
from src.models.page_node import ManualNode, ProductNode, TopicNode, VersionNode
from src.models.page_type import PageType, VersionStatus
from src.models.viewer import ViewerContext
from src.property_store import keys


class TestBuild:
    """Test cases for typed node construction."""

    def test_build_dispatches_on_type_tag(self, resolver, foo_product):
        """Each stored type tag builds the matching node class."""
        assert isinstance(resolver.build("Foo"), ProductNode)
        assert isinstance(resolver.build("Foo/1.0"), VersionNode)
        assert isinstance(resolver.build("Foo/1.0/Guide"), ManualNode)
        assert isinstance(resolver.build("Foo/1.0/Guide/Intro"), TopicNode)

    def test_build_untyped_page_returns_none(self, resolver, store):
        store.create_page("Loose")

        assert resolver.build("Loose") is None
        assert resolver.build("Missing") is None

    def test_build_unknown_tag_returns_none(self, resolver, store):
        store.set("Odd", keys.PAGE_TYPE, "Chapter")

        assert resolver.type_of("Odd") is None
        assert resolver.build("Odd") is None

    def test_require_raises_for_untyped_page(self, resolver, store):
        store.set("Odd", keys.PAGE_TYPE, "Chapter")

        with pytest.raises(UnknownPageTypeError) as exc_info:
            resolver.require("Odd")

        assert exc_info.value.type_tag == "Chapter"

    def test_product_roles(self, resolver, foo_product):
        product = resolver.build("Foo")

        assert product.admins == frozenset({"Alice"})
        assert product.is_editor("Bob") is True
        assert product.is_previewer("Alice") is False
        assert product.is_admin(None) is False

    def test_product_display_name_defaults_to_page_id(self, resolver, foo_product):
        assert resolver.build("Foo").display_name == "Foo"

    def test_version_attributes(self, resolver, foo_product):
        version = resolver.build("Foo/2.0")

        assert version.version_string == "2.0"
        assert version.status is VersionStatus.RELEASED
        assert version.inherit is True
        assert version.display_name == "2.0"

    def test_version_unknown_status_is_other(self, resolver, make_page):
        make_page("Foo", PageType.PRODUCT)
        make_page("Foo/3.0", PageType.VERSION, properties={keys.STATUS: "Beta"})

        assert resolver.build("Foo/3.0").status is VersionStatus.OTHER

    def test_manual_attributes(self, resolver, foo_product):
        manual = resolver.build("Foo/1.0/Guide")

        assert manual.display_name == "User Guide"
        assert manual.topics_list == "* Intro\n* Setup"
        assert manual.inherit is False
        assert manual.pagination is False

    def test_manual_display_name_defaults_to_local_name(self, resolver, foo_product):
        assert resolver.build("Foo/1.5/Guide").display_name == "Guide"


class TestBuildTopic:
    """Test cases for topic ownership, standalone and invalid topics."""

    def test_topic_owned_by_parent_manual(self, resolver, foo_product):
        topic = resolver.build("Foo/1.0/Guide/Intro")

        assert topic.manual_id == "Foo/1.0/Guide"
        assert topic.manual_local_name == "Guide"
        assert topic.standalone is False
        assert topic.invalid is False

    def test_topic_under_non_manual_is_invalid(self, resolver, make_page):
        make_page("Shared", PageType.TOPIC)
        make_page("Loose/Glossary", PageType.TOPIC)

        assert resolver.build("Shared").invalid is True
        topic = resolver.build("Loose/Glossary")
        assert topic.invalid is True
        assert topic.manual_id is None

    def test_query_makes_topic_standalone(self, resolver, foo_product, make_page):
        """A manual named by the query string owns the topic for this request."""
        make_page("Shared/Glossary", PageType.TOPIC)
        viewer = ViewerContext(query={"product": "Foo", "version": "1.0", "manual": "Guide"})

        topic = resolver.build("Shared/Glossary", viewer)

        assert topic.standalone is True
        assert topic.invalid is True
        assert topic.manual_id == "Foo/1.0/Guide"

    def test_query_naming_non_manual_is_ignored(self, resolver, foo_product):
        viewer = ViewerContext(query={"product": "Foo", "version": "9.9", "manual": "Guide"})

        topic = resolver.build("Foo/1.0/Guide/Intro", viewer)

        assert topic.standalone is False
        assert topic.manual_id == "Foo/1.0/Guide"

    def test_new_standalone_topic(self, resolver, foo_product, make_page):
        make_page("Shared/Glossary", PageType.TOPIC)
        manual = resolver.build("Foo/1.0/Guide")

        topic = resolver.new_standalone_topic("Shared/Glossary", manual)

        assert topic.standalone is True
        assert topic.manual_id == "Foo/1.0/Guide"

    def test_new_standalone_topic_requires_topic_page(self, resolver, foo_product):
        manual = resolver.build("Foo/1.0/Guide")

        assert resolver.new_standalone_topic("Foo/1.5", manual) is None
        assert resolver.new_standalone_topic("Nowhere", manual) is None


class TestCheckEligibility:
    """Test cases for check_eligibility()."""

    def test_registered_product_is_eligible(self, resolver):
        assert resolver.check_eligibility(PageType.PRODUCT, None, "Foo") is None

    def test_registered_product_with_slash_is_eligible(self, resolver):
        assert resolver.check_eligibility(PageType.PRODUCT, "Acme", "Acme/Cloud") is None

    def test_unregistered_product(self, resolver):
        message = resolver.check_eligibility(PageType.PRODUCT, None, "Bar")

        assert message == "Error: This page must first be registered as a product page."

    def test_missing_parent(self, resolver):
        message = resolver.check_eligibility(PageType.VERSION, None, "1.0")

        assert message == "Error: A Version page must have a parent page."

    def test_wrong_parent_type_names_both_types(self, resolver, foo_product):
        message = resolver.check_eligibility(PageType.TOPIC, "Foo/1.0", "Foo/1.0/Intro")

        assert message == (
            "Error: The parent page, Foo/1.0, is of type Version; it must be of type Manual."
        )

    def test_untyped_parent(self, resolver, store):
        store.create_page("Loose")

        message = resolver.check_eligibility(PageType.VERSION, "Loose", "Loose/1.0")

        assert "is of type none" in message
        assert "must be of type Product" in message

    @pytest.mark.parametrize("page_type, parent_id", [
        (PageType.VERSION, "Foo"),
        (PageType.MANUAL, "Foo/1.0"),
        (PageType.TOPIC, "Foo/1.0/Guide"),
    ])
    def test_correct_parent_is_eligible(self, resolver, foo_product, page_type, parent_id):
        assert resolver.check_eligibility(page_type, parent_id, f"{parent_id}/New") is None


class TestNavigationHelpers:
    """Test cases for children_of() and product_and_version()."""

    def test_children_of_filters_by_type_and_sorts(self, resolver, foo_product, make_page):
        make_page("Foo/1.0/Stray", PageType.TOPIC)

        assert resolver.children_of("Foo", PageType.VERSION) == ["Foo/1.0", "Foo/1.5", "Foo/2.0"]
        assert resolver.children_of("Foo/1.0", PageType.MANUAL) == ["Foo/1.0/Guide"]

    def test_product_and_version_of_topic(self, resolver, foo_product):
        topic = resolver.build("Foo/1.5/Guide/Intro")

        product, version = resolver.product_and_version(topic)

        assert product.page_id == "Foo"
        assert version.page_id == "Foo/1.5"

    def test_product_and_version_of_product(self, resolver, foo_product):
        product, version = resolver.product_and_version(resolver.build("Foo"))

        assert product.page_id == "Foo"
        assert version is None

    def test_standalone_topic_belongs_to_manual_version(self, resolver, foo_product, make_page):
        make_page("Shared/Glossary", PageType.TOPIC)
        manual = resolver.build("Foo/2.0/Guide")
        topic = resolver.new_standalone_topic("Shared/Glossary", manual)

        assert resolver.product_and_version_ids(topic) == ("Foo", "Foo/2.0")

    def test_product_with_slash(self, resolver, make_page):
        make_page("Acme/Cloud", PageType.PRODUCT)
        make_page("Acme/Cloud/2.0", PageType.VERSION)
        make_page("Acme/Cloud/2.0/Guide", PageType.MANUAL)

        product, version = resolver.product_and_version(resolver.build("Acme/Cloud/2.0/Guide"))

        assert product.page_id == "Acme/Cloud"
        assert version.version_string == "2.0"

    def test_manual_of(self, resolver, foo_product, make_page):
        make_page("Shared", PageType.TOPIC)

        assert resolver.manual_of(resolver.build("Foo/1.0/Guide/Intro")).page_id == "Foo/1.0/Guide"
        assert resolver.manual_of(resolver.build("Shared")) is None


class TestContextNames:
    """Test cases for context_names()."""

    def test_topic_has_all_three(self, resolver, foo_product):
        topic = resolver.build("Foo/1.0/Guide/Intro")

        assert resolver.context_names(topic) == ("Foo", "1.0", "User Guide")

    def test_names_skipped_at_and_above_page_level(self, resolver, foo_product):
        assert resolver.context_names(resolver.build("Foo")) == (None, None, None)
        assert resolver.context_names(resolver.build("Foo/1.0")) == ("Foo", None, None)
        assert resolver.context_names(resolver.build("Foo/1.0/Guide")) == ("Foo", "1.0", None)

    def test_product_display_name(self, resolver, make_page):
        make_page("Acme/Cloud", PageType.PRODUCT, properties={keys.DISPLAY_NAME: "Acme Cloud"})
        make_page("Acme/Cloud/2.0", PageType.VERSION)
        make_page("Acme/Cloud/2.0/Guide", PageType.MANUAL)

        assert resolver.context_names(resolver.build("Acme/Cloud/2.0/Guide")) == ("Acme Cloud", "2.0", None)

    def test_standalone_topic_keeps_own_version_and_names_showing_manual(self, resolver, foo_product):
        viewer = ViewerContext(query={"product": "Foo", "version": "2.0", "manual": "Guide"})
        topic = resolver.build("Foo/1.0/Guide/Setup", viewer)

        assert topic.standalone is True
        assert resolver.context_names(topic) == ("Foo", "1.0", "Guide")

    def test_loose_topic_has_no_names(self, resolver, make_page):
        make_page("Loose", PageType.TOPIC)

        assert resolver.context_names(resolver.build("Loose")) == (None, None, None)


class TestStructuralProductAndVersion:
    """Test cases for product_and_version_ids(structural=True)."""

    def test_standalone_topic_located_by_own_path(self, resolver, foo_product):
        viewer = ViewerContext(query={"product": "Foo", "version": "2.0", "manual": "Guide"})
        topic = resolver.build("Foo/1.0/Guide/Intro", viewer)

        assert resolver.product_and_version_ids(topic) == ("Foo", "Foo/2.0")
        assert resolver.product_and_version_ids(topic, structural=True) == ("Foo", "Foo/1.0")

    def test_invalid_topic_falls_back_to_manual(self, resolver, foo_product, make_page):
        make_page("Shared/Glossary", PageType.TOPIC)
        viewer = ViewerContext(query={"product": "Foo", "version": "2.0", "manual": "Guide"})
        topic = resolver.build("Shared/Glossary", viewer)

        assert resolver.product_and_version_ids(topic, structural=True) == ("Foo", "Foo/2.0")
