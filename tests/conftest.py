"""Root pytest configuration for all tests.

Provides an in-memory property store, a page builder for populating it,
and a small "Foo" product hierarchy shared by the unit tests.
"""

import logging

import pytest

from src.hierarchy.path_model import split_path
from src.hierarchy.resolver import HierarchyResolver
from src.inheritance.inheritance_engine import InheritanceEngine
from src.models.page_type import PageType
from src.models.viewer import (
    CAPABILITY_ADMINISTER,
    ViewerContext,
)
from src.property_store import keys
from src.property_store.store import InMemoryPropertyStore
from src.rendering.html_renderer import HtmlRenderer
from src.toc.toc_builder import TocBuilder
from src.versions.version_index import VersionIndex

# Resolution debug logs are noisy when a test fails; keep warnings only
logging.getLogger("src").setLevel(logging.WARNING)


@pytest.fixture
def store():
    """Empty in-memory property store."""
    return InMemoryPropertyStore()


@pytest.fixture
def make_page(store):
    """Factory writing a typed page the way the directive processor would.

    Example:
        make_page("Foo/1.0", PageType.VERSION, properties={keys.STATUS: "Released"})
    """
    def _make_page(page_id, page_type, text="", inherit=False, properties=None, roles=None):
        store.create_page(page_id, text)
        store.set(page_id, keys.PAGE_TYPE, page_type.value)
        parent_id, _ = split_path(page_id)
        if page_type is not PageType.PRODUCT and parent_id is not None:
            store.set(page_id, keys.PARENT_PAGE, parent_id)
        if inherit:
            store.set(page_id, keys.INHERIT, '1')
        for key, value in (properties or {}).items():
            store.set(page_id, key, value)
        for key, names in (roles or {}).items():
            for name in names:
                store.add(page_id, key, name)
        return page_id

    return _make_page


@pytest.fixture
def foo_product(make_page):
    """Product "Foo" with three released versions and a Guide manual.

    Layout:
        Foo                         admins=Alice editors=Bob previewers=Carol
        Foo/1.0  Released           Guide: Intro, Setup (content "Y")
        Foo/1.5  Released           Guide inherits; Intro content "X"
        Foo/2.0  Released, inherit  Guide inherits; Intro inherits
    """
    make_page("Foo", PageType.PRODUCT, roles={
        keys.PRODUCT_ADMIN: ["Alice"],
        keys.PRODUCT_EDITOR: ["Bob"],
        keys.PRODUCT_PREVIEWER: ["Carol"],
    })
    make_page("Foo/1.0", PageType.VERSION, properties={
        keys.STATUS: "Released",
        keys.MANUALS_LIST: "Guide",
    })
    make_page("Foo/2.0", PageType.VERSION, inherit=True, properties={keys.STATUS: "Released"})
    make_page("Foo/1.5", PageType.VERSION, properties={keys.STATUS: "Released"})

    make_page("Foo/1.0/Guide", PageType.MANUAL, text="Guide 1.0", properties={
        keys.TOPICS_LIST: "* Intro\n* Setup",
        keys.DISPLAY_NAME: "User Guide",
    })
    make_page("Foo/1.5/Guide", PageType.MANUAL, inherit=True)
    make_page("Foo/2.0/Guide", PageType.MANUAL, inherit=True)

    make_page("Foo/1.0/Guide/Intro", PageType.TOPIC, text="Y")
    make_page("Foo/1.0/Guide/Setup", PageType.TOPIC, text="Setup 1.0")
    make_page("Foo/1.5/Guide/Intro", PageType.TOPIC, text="X")
    make_page("Foo/2.0/Guide/Intro", PageType.TOPIC, inherit=True)
    return "Foo"


@pytest.fixture
def resolver(store):
    return HierarchyResolver(store, product_pages=["Foo", "Acme/Cloud"])


@pytest.fixture
def version_index(resolver):
    return VersionIndex(resolver)


@pytest.fixture
def inheritance(resolver, version_index):
    return InheritanceEngine(resolver, version_index)


@pytest.fixture
def renderer():
    return HtmlRenderer()


@pytest.fixture
def toc_builder(resolver, inheritance, renderer):
    return TocBuilder(resolver, inheritance, renderer)


@pytest.fixture
def anonymous():
    return ViewerContext()


@pytest.fixture
def administrator():
    return ViewerContext(name="Root", capabilities=frozenset({CAPABILITY_ADMINISTER}))
