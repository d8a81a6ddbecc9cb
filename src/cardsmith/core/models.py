"""Read-only records handed to the core by the CRUD layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Collection(BaseModel):
    """A flashcard collection and its theme attributes."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    title: str = "Untitled"
    description: str | None = None
    header_color: str | None = None
    background_color: str | None = None
    font_color: str | None = None
    header_font_color: str | None = None
    header_text_left: str | None = None
    font_family: str | None = None
    width_mm: float | None = Field(default=None, gt=0)
    height_mm: float | None = Field(default=None, gt=0)

    @field_validator(
        "description",
        "header_color",
        "background_color",
        "font_color",
        "header_font_color",
        "header_text_left",
        "font_family",
        "width_mm",
        "height_mm",
        mode="before",
    )
    @classmethod
    def _optional_fields(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: object) -> object:
        return "Untitled" if _blank_to_none(value) is None else value


class Flashcard(BaseModel):
    """A single card; ``front`` and ``back`` hold stored markup fragments."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int | None = None
    collection: int | None = None
    front: str = ""
    back: str = ""
    header_right: str | None = None
    is_info_card: bool = False

    @field_validator("front", "back", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("header_right", mode="before")
    @classmethod
    def _optional_header(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("is_info_card", mode="before")
    @classmethod
    def _none_to_false(cls, value: object) -> object:
        return False if value is None else value

    def side(self, name: str) -> str:
        """Return the markup stored for ``front`` or ``back``."""
        if name == "front":
            return self.front
        if name == "back":
            return self.back
        raise ValueError(f"Unknown flashcard side '{name}'.")


class CollectionBundle(BaseModel):
    """A collection together with its ordered flashcards."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    collection: Collection
    flashcards: list[Flashcard] = Field(default_factory=list)

    @field_validator("flashcards", mode="before")
    @classmethod
    def _none_to_list(cls, value: object) -> object:
        return [] if value is None else value


__all__ = ["Collection", "CollectionBundle", "Flashcard"]
