"""Tests for display formatting."""

from content_search_hub.models.results import SearchResult
from content_search_hub.result_processing.formatter import (
    ResultFormatter,
    format_results,
)
from content_search_hub.utils.errors import (
    ItemLookupError,
    MissingConfigurationError,
)

from .conftest import make_hit


class StaticIcon:
    """Settings provider returning a fixed icon."""

    def __init__(self, icon):
        self.icon = icon
        self.calls = 0

    def default_icon(self):
        self.calls += 1
        return self.icon


class MissingIcon:
    """Settings provider whose default icon is not configured."""

    def default_icon(self):
        raise MissingConfigurationError("formatter.default_icon")


class TestTitle:
    """Title resolution."""

    def test_display_name_preferred_over_name(self):
        hit = make_hit("a", display_name="Home Page", name="home", icon="i.png")

        [result] = format_results([hit])

        assert result.title == "Home Page"

    def test_falls_back_to_name(self):
        hit = make_hit("a", name="home", icon="i.png")

        [result] = format_results([hit])

        assert result.title == "home"

    def test_entry_without_any_name_is_dropped(self):
        hits = [
            make_hit("a", name=None, display_name=None, icon="i.png"),
            make_hit("b", icon="i.png"),
        ]

        results = format_results(hits)

        assert [r.title for r in results] == ["name-b"]


class TestIcon:
    """Icon resolution order."""

    def test_hit_icon_first(self, repository):
        [result] = format_results(
            [make_hit("item-1", icon="hit.png")], repository, StaticIcon("d.png")
        )
        assert result.icon == "hit.png"

    def test_item_icon_second(self, repository):
        [result] = format_results(
            [make_hit("item-1")], repository, StaticIcon("d.png")
        )
        assert result.icon == "item-icon.png"

    def test_default_icon_last(self, repository):
        [result] = format_results(
            [make_hit("item-2")], repository, StaticIcon("d.png")
        )
        assert result.icon == "d.png"

    def test_default_icon_resolved_once_per_call(self):
        provider = StaticIcon("d.png")
        formatter = ResultFormatter(settings_provider=provider)

        results = formatter.format([make_hit("a"), make_hit("b"), make_hit("c")])

        assert len(results) == 3
        assert provider.calls == 1

    def test_no_icon_drops_entry(self, repository):
        results = format_results(
            [make_hit("item-1"), make_hit("item-2")], repository, StaticIcon(None)
        )
        assert [r.title for r in results] == ["name-item-1"]

    def test_configuration_error_means_no_default_icon(self, repository):
        results = format_results(
            [make_hit("item-1"), make_hit("item-2")], repository, MissingIcon()
        )
        assert [r.icon for r in results] == ["item-icon.png"]


class TestItemResolution:
    """Entries whose item cannot be resolved are dropped."""

    def test_unknown_item_is_dropped(self, repository):
        results = format_results(
            [make_hit("gone", icon="i.png"), make_hit("item-2", icon="i.png")],
            repository,
        )
        assert [r.title for r in results] == ["name-item-2"]

    def test_lookup_error_is_dropped(self):
        class Failing:
            def get_item(self, item_id):
                raise ItemLookupError(item_id, "access denied")

        assert format_results([make_hit("a", icon="i.png")], Failing()) == []

    def test_repository_failure_is_dropped(self):
        class Broken:
            def get_item(self, item_id):
                raise ConnectionError("backend offline")

        assert format_results([make_hit("a", icon="i.png")], Broken()) == []

    def test_without_repository_items_are_not_required(self):
        results = format_results([make_hit("anything", icon="i.png")])
        assert len(results) == 1


class TestUrl:
    """URL resolution."""

    def test_uri_used_as_url(self):
        [result] = format_results([make_hit("a", icon="i.png", uri="cms://a")])
        assert result == SearchResult(title="name-a", icon="i.png", url="cms://a")

    def test_missing_uri_gives_empty_url(self):
        [result] = format_results([make_hit("a", icon="i.png", uri=None)])
        assert result.url == ""
