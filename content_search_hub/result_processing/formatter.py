"""Display formatting for merged search hits.

Maps each retained hit to a ``SearchResult`` (title, icon, url). Entries that
resolve to no item, no title or no icon are dropped from the output; this is
filtering, not an error.
"""

from collections.abc import Iterable

from ..models.hits import ContentItem, Hit
from ..models.interfaces import ItemRepository, SettingsProvider
from ..models.results import SearchResult
from ..utils.errors import ConfigurationError, ItemLookupError
from ..utils.logging import get_logger

logger = get_logger(__name__)

_UNRESOLVED = object()


class ResultFormatter:
    """Formats merged hits for display."""

    def __init__(
        self,
        item_repository: ItemRepository | None = None,
        settings_provider: SettingsProvider | None = None,
    ):
        """
        Initialize the formatter.

        Args:
            item_repository: When given, hits whose item cannot be resolved are
                dropped and the item's icon is used as a fallback
            settings_provider: Source of the default icon
        """
        self.item_repository = item_repository
        self.settings_provider = settings_provider

    def format(self, entries: Iterable[Hit]) -> list[SearchResult]:
        """Format entries in order, skipping the ones that cannot be displayed."""
        results = []
        default_icon = _UNRESOLVED

        for hit in entries:
            item = None
            if self.item_repository is not None:
                item = self._get_item(hit.item_id)
                if item is None:
                    logger.debug(f"Dropping {hit.item_id}: item is unavailable")
                    continue

            title = hit.display_name if hit.display_name is not None else hit.name
            if title is None:
                logger.debug(f"Dropping {hit.item_id}: no title")
                continue

            icon = hit.icon
            if icon is None and item is not None:
                icon = item.icon
            if icon is None:
                if default_icon is _UNRESOLVED:
                    default_icon = self._default_icon()
                icon = default_icon
            if icon is None:
                logger.debug(f"Dropping {hit.item_id}: no icon")
                continue

            results.append(
                SearchResult(title=title, icon=str(icon), url=hit.uri or "")
            )

        return results

    def _get_item(self, item_id: str) -> ContentItem | None:
        try:
            return self.item_repository.get_item(item_id)
        except ItemLookupError as e:
            logger.debug(f"Item lookup failed: {e.message}")
            return None
        except Exception as e:
            logger.warning(f"Item lookup failed for {item_id}: {e}")
            return None

    def _default_icon(self) -> str | None:
        if self.settings_provider is None:
            return None
        try:
            return self.settings_provider.default_icon()
        except ConfigurationError as e:
            logger.warning(f"No default icon available: {e.message}")
            return None


def format_results(
    entries: Iterable[Hit],
    item_repository: ItemRepository | None = None,
    settings_provider: SettingsProvider | None = None,
) -> list[SearchResult]:
    """Format entries with a one-off ``ResultFormatter``."""
    return ResultFormatter(item_repository, settings_provider).format(entries)
