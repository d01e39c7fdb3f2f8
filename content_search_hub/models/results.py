"""Result models."""

from collections.abc import Iterator

from pydantic import BaseModel, Field

from .hits import Hit


class SearchResult(BaseModel):
    """A display-ready search result."""

    title: str = Field(..., description="Result title")
    icon: str = Field(..., description="Icon to show next to the result")
    url: str = Field("", description="Result URL")


class SearchResultSink(BaseModel):
    """Mutable output collection the pipeline appends formatted results to."""

    results: list[SearchResult] = Field(
        default_factory=list, description="Formatted results"
    )

    def add_result(self, result: SearchResult) -> None:
        self.results.append(result)

    @property
    def count(self) -> int:
        return len(self.results)


class ResultSet:
    """Ordered, size-bounded collection of retained hits for one merge.

    Entries keep insertion order. Replacing an entry removes the incumbent
    and appends the newcomer, so a replaced entry moves to the end. Once
    frozen the set is read-only.
    """

    def __init__(self, cap: int):
        if cap < 0:
            raise ValueError("cap must be non-negative")
        self.cap = cap
        self._entries: list[Hit] = []
        # First retained entry per identity
        self._first: dict[str, Hit] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hit]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> Hit:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"ResultSet(cap={self.cap}, entries={len(self._entries)})"

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self.cap

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find(self, item_id: str) -> Hit | None:
        """Return the first retained hit with this identity, if any."""
        return self._first.get(item_id)

    def append(self, hit: Hit) -> None:
        self._check_mutable()
        self._entries.append(hit)
        self._first.setdefault(hit.item_id, hit)

    def replace(self, incumbent: Hit, hit: Hit) -> None:
        """Remove the incumbent and append the replacing hit at the end."""
        self._check_mutable()
        index = next(
            i for i, entry in enumerate(self._entries) if entry is incumbent
        )
        del self._entries[index]
        self._entries.append(hit)

        if self._first.get(incumbent.item_id) is incumbent:
            del self._first[incumbent.item_id]
            for entry in self._entries:
                if entry.item_id == incumbent.item_id:
                    self._first[entry.item_id] = entry
                    break
        self._first.setdefault(hit.item_id, hit)

    def freeze(self) -> "ResultSet":
        self._frozen = True
        return self

    def to_list(self) -> list[Hit]:
        return list(self._entries)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("ResultSet is frozen")
