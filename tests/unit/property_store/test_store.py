"""Unit tests for property_store.store module."""

import pytest

from src.property_store import keys
from src.property_store.store import InMemoryPropertyStore, PropertyStore, StoredPage


class TestInMemoryPropertyStoreReads:
    """Test cases for single- and multi-valued reads."""

    def test_get_missing_page_returns_none(self, store):
        """Reading from a page that does not exist returns None."""
        assert store.get("Nope", keys.PAGE_TYPE) is None

    def test_get_missing_key_returns_none(self, store):
        """Reading an unset key returns None."""
        store.create_page("Foo")

        assert store.get("Foo", keys.STATUS) is None

    def test_set_then_get(self, store):
        """A set value is returned by get."""
        store.set("Foo", keys.PAGE_TYPE, "Product")

        assert store.get("Foo", keys.PAGE_TYPE) == "Product"

    def test_set_replaces_previous_value(self, store):
        """set() replaces every earlier value of the key."""
        store.add("Foo", keys.PRODUCT_ADMIN, "Alice")
        store.add("Foo", keys.PRODUCT_ADMIN, "Bob")

        store.set("Foo", keys.PRODUCT_ADMIN, "Carol")

        assert store.get_multi("Foo", keys.PRODUCT_ADMIN) == {"Carol"}

    def test_add_collapses_duplicates(self, store):
        """Multi-valued keys behave as sets."""
        store.add("Foo", keys.PRODUCT_EDITOR, "Bob")
        store.add("Foo", keys.PRODUCT_EDITOR, "Bob")
        store.add("Foo", keys.PRODUCT_EDITOR, "Dave")

        assert store.get_multi("Foo", keys.PRODUCT_EDITOR) == {"Bob", "Dave"}

    def test_get_on_multi_valued_key_is_deterministic(self, store):
        """get() on a key with several values returns the smallest."""
        store.add("Foo", keys.PRODUCT_ADMIN, "Zed")
        store.add("Foo", keys.PRODUCT_ADMIN, "Alice")

        assert store.get("Foo", keys.PRODUCT_ADMIN) == "Alice"

    def test_get_multi_returns_copy(self, store):
        """Mutating the returned set does not change the store."""
        store.add("Foo", keys.PRODUCT_ADMIN, "Alice")

        store.get_multi("Foo", keys.PRODUCT_ADMIN).add("Mallory")

        assert store.get_multi("Foo", keys.PRODUCT_ADMIN) == {"Alice"}

    def test_get_multi_missing_page_returns_empty_set(self, store):
        assert store.get_multi("Nope", keys.PRODUCT_ADMIN) == set()

    def test_find_by_property_value(self, store):
        """Reverse query finds every page holding the value."""
        store.set("Foo/1.0", keys.PARENT_PAGE, "Foo")
        store.set("Foo/2.0", keys.PARENT_PAGE, "Foo")
        store.set("Bar/1.0", keys.PARENT_PAGE, "Bar")

        assert store.find_by_property_value(keys.PARENT_PAGE, "Foo") == {"Foo/1.0", "Foo/2.0"}

    def test_find_by_property_value_no_match(self, store):
        assert store.find_by_property_value(keys.PARENT_PAGE, "Foo") == set()


class TestInMemoryPropertyStorePages:
    """Test cases for page lifecycle and text."""

    def test_create_page_and_exists(self, store):
        """Created pages exist and keep their text."""
        store.create_page("Foo", "Hello")

        assert store.exists("Foo") is True
        assert store.exists("Bar") is False
        assert store.get_text("Foo") == "Hello"

    def test_get_text_missing_page_returns_none(self, store):
        assert store.get_text("Nope") is None

    def test_create_page_twice_replaces_text_and_keeps_properties(self, store):
        """Re-creating a page updates its text only."""
        store.create_page("Foo", "old")
        store.set("Foo", keys.PAGE_TYPE, "Product")

        store.create_page("Foo", "new")

        assert store.get_text("Foo") == "new"
        assert store.get("Foo", keys.PAGE_TYPE) == "Product"

    def test_writing_property_creates_page(self, store):
        """set() on an unknown page creates it with empty text."""
        store.set("Foo", keys.PAGE_TYPE, "Product")

        assert store.exists("Foo") is True
        assert store.get_text("Foo") == ""

    def test_page_ids_sorted(self, store):
        store.create_page("b")
        store.create_page("a")
        store.create_page("c")

        assert store.page_ids() == ["a", "b", "c"]

    def test_init_with_pages(self):
        """Pages passed to the constructor are readable."""
        page = StoredPage(page_id="Foo", text="T", properties={keys.PAGE_TYPE: {"Product"}})

        store = InMemoryPropertyStore([page])

        assert store.get("Foo", keys.PAGE_TYPE) == "Product"
        assert store.get_text("Foo") == "T"


class TestInMemoryPropertyStoreClear:
    """Test cases for clear()."""

    def test_clear_removes_all_zdocs_keys_but_keeps_text(self, store):
        """Clearing a page removes ZDocs properties and leaves its text."""
        store.create_page("Foo", "text")
        store.set("Foo", keys.PAGE_TYPE, "Product")
        store.add("Foo", keys.PRODUCT_ADMIN, "Alice")
        store.set("Foo", "Other", "kept")

        store.clear("Foo")

        assert store.get("Foo", keys.PAGE_TYPE) is None
        assert store.get_multi("Foo", keys.PRODUCT_ADMIN) == set()
        assert store.get("Foo", "Other") == "kept"
        assert store.get_text("Foo") == "text"

    def test_clear_selected_keys(self, store):
        store.set("Foo", keys.PAGE_TYPE, "Product")
        store.set("Foo", keys.DISPLAY_NAME, "Foo!")

        store.clear("Foo", [keys.DISPLAY_NAME])

        assert store.get("Foo", keys.PAGE_TYPE) == "Product"
        assert store.get("Foo", keys.DISPLAY_NAME) is None

    def test_clear_missing_page_is_noop(self, store):
        store.clear("Nope")

        assert store.exists("Nope") is False


class TestPropertyStoreInterface:
    """Test cases for the abstract interface."""

    def test_cannot_instantiate_abstract_store(self):
        with pytest.raises(TypeError):
            PropertyStore()


class TestIsFlagSet:
    """Test cases for keys.is_flag_set()."""

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on", "x"])
    def test_truthy_values(self, value):
        assert keys.is_flag_set(value) is True

    @pytest.mark.parametrize("value", [None, "", "0", "false", "No", " off "])
    def test_falsy_values(self, value):
        assert keys.is_flag_set(value) is False
