"""In-memory query executor and item repository."""

from collections.abc import Iterable, Iterator

from ..models.hits import ContentItem, Hit
from ..models.query import SearchType


class InMemoryQueryExecutor:
    """Evaluates text queries lazily over a fixed list of hits.

    A hit matches when its name starts with the query text, or its content
    contains the query text. With a content language the content match is
    restricted to hits in that language; the name match is not.
    """

    def __init__(self, hits: Iterable[Hit] = ()):
        self.hits: list[Hit] = list(hits)

    def add(self, hit: Hit) -> None:
        self.hits.append(hit)

    def execute(
        self,
        query_text: str | None,
        root: str | None = None,
        search_type: SearchType = SearchType.OTHER,
        language: str | None = None,
    ) -> Iterator[Hit]:
        if not query_text:
            return iter(())
        scope = root if search_type != SearchType.CONTENT_EDITOR else None
        return self._search(query_text, scope, language or None)

    def _search(
        self, query_text: str, root: str | None, language: str | None
    ) -> Iterator[Hit]:
        for hit in self.hits:
            if not self.matches(hit, query_text, language):
                continue
            if root is not None and root not in hit.paths:
                continue
            yield hit

    @staticmethod
    def matches(hit: Hit, query_text: str, language: str | None = None) -> bool:
        if hit.name is not None and hit.name.startswith(query_text):
            return True
        if query_text not in hit.content:
            return False
        return language is None or hit.language == language


class InMemoryItemRepository:
    """Dict-backed item repository."""

    def __init__(self, items: Iterable[ContentItem] = ()):
        self.items: dict[str, ContentItem] = {item.item_id: item for item in items}

    def add(self, item: ContentItem) -> None:
        self.items[item.item_id] = item

    def remove(self, item_id: str) -> None:
        self.items.pop(item_id, None)

    def get_item(self, item_id: str) -> ContentItem | None:
        return self.items.get(item_id)
