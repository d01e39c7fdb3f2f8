"""Hit and content item models."""

from pydantic import BaseModel, ConfigDict, Field


class Hit(BaseModel):
    """A single raw candidate returned by a query, before deduplication."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(..., description="Opaque identity of the underlying item")
    language: str = Field(..., description="Language tag of this hit")
    version: int = Field(..., description="Version number within the language")
    content: str = Field("", description="Content snippet")
    name: str | None = Field(None, description="Raw item name")
    display_name: str | None = Field(None, description="Display name")
    icon: str | None = Field(None, description="Icon hint stored with the hit")
    paths: tuple[str, ...] = Field(
        default_factory=tuple, description="Identities of the item's ancestors"
    )
    uri: str | None = Field(None, description="Originating item URI")


class ContentItem(BaseModel):
    """Repository view of an item, used for visibility and icon resolution."""

    item_id: str = Field(..., description="Item identity")
    name: str = Field("", description="Item name")
    parent_id: str | None = Field(None, description="Identity of the parent item")
    hidden: bool = Field(False, description="Whether the item itself is hidden")
    icon: str | None = Field(None, description="Icon configured on the item")
