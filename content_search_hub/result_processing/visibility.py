"""Hidden-item filtering for search hits."""

from ..models.hits import ContentItem, Hit
from ..models.interfaces import ItemRepository
from ..utils.errors import ItemLookupError
from ..utils.logging import get_logger

logger = get_logger(__name__)


class HiddenItemFilter:
    """Withholds hits whose item, or any ancestor, is hidden.

    Whether the caller may see hidden items is passed in explicitly per
    request. Items the repository cannot resolve are treated as not hidden.
    A repository failure surfaces as ``ItemLookupError`` so the merger skips
    the hit.
    """

    def __init__(self, repository: ItemRepository, show_hidden_items: bool = False):
        self.repository = repository
        self.show_hidden_items = show_hidden_items

    def __call__(self, hit: Hit) -> bool:
        return self.is_hidden_and_unauthorized(hit.item_id)

    def is_hidden_and_unauthorized(self, item_id: str) -> bool:
        if self.show_hidden_items:
            return False
        return self.is_hidden(item_id)

    def is_hidden(self, item_id: str) -> bool:
        """
        Check the item and its ancestor chain for the hidden flag.

        Raises:
            ItemLookupError: If the repository fails while resolving the chain
        """
        item = self._get_item(item_id)
        if item is None:
            return False
        return self._is_hidden(item)

    def _is_hidden(self, item: ContentItem) -> bool:
        seen = set()
        current: ContentItem | None = item
        while current is not None:
            if current.hidden:
                return True
            seen.add(current.item_id)
            parent_id = current.parent_id
            if parent_id is None:
                return False
            if parent_id in seen:
                logger.warning(f"Ancestor cycle detected at item {parent_id}")
                return False
            current = self._get_item(parent_id)
        return False

    def _get_item(self, item_id: str) -> ContentItem | None:
        try:
            return self.repository.get_item(item_id)
        except ItemLookupError:
            raise
        except Exception as e:
            raise ItemLookupError(item_id, original_error=e) from e
