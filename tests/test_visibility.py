"""Tests for hidden-item filtering."""

import pytest

from content_search_hub.backends.memory import InMemoryItemRepository
from content_search_hub.models.hits import ContentItem
from content_search_hub.result_processing.visibility import HiddenItemFilter
from content_search_hub.utils.errors import ItemLookupError

from .conftest import make_hit


class TestHiddenItemFilter:
    """Tests for HiddenItemFilter."""

    def test_visible_item(self, repository):
        visibility = HiddenItemFilter(repository)
        assert not visibility.is_hidden("item-1")
        assert not visibility.is_hidden_and_unauthorized("item-1")

    def test_item_flagged_hidden(self, repository):
        visibility = HiddenItemFilter(repository)
        assert visibility.is_hidden("system")

    def test_hidden_ancestor_hides_descendants(self, repository):
        visibility = HiddenItemFilter(repository)
        assert visibility.is_hidden("templates")
        assert visibility.is_hidden("item-3")

    def test_caller_allowed_to_view_hidden_items(self, repository):
        visibility = HiddenItemFilter(repository, show_hidden_items=True)
        assert visibility.is_hidden("item-3")
        assert not visibility.is_hidden_and_unauthorized("item-3")

    def test_missing_item_is_not_hidden(self, repository):
        visibility = HiddenItemFilter(repository)
        assert not visibility.is_hidden_and_unauthorized("does-not-exist")

    def test_missing_parent_ends_the_chain(self):
        repository = InMemoryItemRepository(
            [ContentItem(item_id="orphan", parent_id="deleted")]
        )
        assert not HiddenItemFilter(repository).is_hidden("orphan")

    def test_ancestor_cycle_terminates(self):
        repository = InMemoryItemRepository(
            [
                ContentItem(item_id="a", parent_id="b"),
                ContentItem(item_id="b", parent_id="a"),
            ]
        )
        assert not HiddenItemFilter(repository).is_hidden("a")

    def test_callable_on_hits(self, repository):
        visibility = HiddenItemFilter(repository)
        assert visibility(make_hit("item-3"))
        assert not visibility(make_hit("item-2"))

    def test_repository_failure_raises_lookup_error(self, repository):
        class FailingParents:
            def get_item(self, item_id):
                if item_id == "item-1":
                    return repository.get_item(item_id)
                raise PermissionError(f"access denied to {item_id}")

        visibility = HiddenItemFilter(FailingParents())

        with pytest.raises(ItemLookupError) as exc_info:
            visibility.is_hidden("item-1")

        assert exc_info.value.item_id == "home"
        assert isinstance(exc_info.value.original_error, PermissionError)

    def test_lookup_errors_pass_through_unchanged(self):
        error = ItemLookupError("a", "gone")

        class Failing:
            def get_item(self, item_id):
                raise error

        with pytest.raises(ItemLookupError) as exc_info:
            HiddenItemFilter(Failing()).is_hidden("a")

        assert exc_info.value is error
