"""Query models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .results import SearchResultSink


class SearchType(str, Enum):
    """Result-type mode requested by the host."""

    CLASSIC = "classic"
    CONTENT_EDITOR = "content_editor"
    OTHER = "other"


class MergePolicy(BaseModel):
    """Dedup behaviour for one merge operation."""

    model_config = ConfigDict(frozen=True)

    preferred_language: str | None = Field(
        None, description="Language whose hits take precedence for an identity"
    )
    mode: SearchType = Field(SearchType.OTHER, description="Result-type mode")
    cap: int = Field(..., ge=0, description="Maximum number of retained entries")

    @property
    def has_preferred_language(self) -> bool:
        return bool(self.preferred_language)


class SearchArgs(BaseModel):
    """Request bundle handed to the search pipeline step by the host."""

    model_config = ConfigDict(validate_assignment=True)

    text_query: str | None = Field(None, description="The search query text")
    content_language: str | None = Field(
        None, description="Optional content language filter"
    )
    root: str | None = Field(None, description="Optional root item for path scoping")
    search_type: SearchType = Field(
        SearchType.OTHER, description="Result-type mode"
    )
    limit: int | None = Field(
        None, ge=0, description="Maximum number of results to return"
    )
    use_legacy_search_engine: bool = Field(
        False, description="Set when the legacy search path must handle the request"
    )
    show_hidden_items: bool = Field(
        False, description="Whether the caller may view hidden items"
    )
    result: SearchResultSink = Field(
        default_factory=SearchResultSink, description="Output sink"
    )
    query_error: dict | None = Field(
        None, description="Structured details of an absorbed query error"
    )

    def to_policy(self, default_cap: int = 10) -> MergePolicy:
        """Build the merge policy for this request."""
        return MergePolicy(
            preferred_language=self.content_language or None,
            mode=self.search_type,
            cap=self.limit if self.limit is not None else default_cap,
        )
