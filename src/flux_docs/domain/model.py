"""Domain models for documentation records and the aggregate search index.

Records are stored one JSON file per ``{category}/{name}``. Fields the tool
does not interpret (section bodies, examples, prop types) are kept as extras
so a record read back from disk is structurally equal to the one saved.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Category(str, Enum):
    """Closed set of documentation categories."""

    COMPONENTS = "components"
    LAYOUTS = "layouts"
    GUIDES = "guides"

    def __str__(self) -> str:
        return self.value


# Probe order used by lookups and index rebuilds
CATEGORY_ORDER: tuple[Category, ...] = (Category.COMPONENTS, Category.LAYOUTS, Category.GUIDES)


def _null_as_default(cls: type[BaseModel], value: Any, info: ValidationInfo) -> Any:
    """Read an explicit JSON ``null`` as an absent field."""
    if value is None:
        return cls.model_fields[info.field_name].get_default(call_default_factory=True)
    return value


class Prop(BaseModel):
    """A single prop descriptor from a component reference table."""

    model_config = ConfigDict(extra="allow")

    name: str = ""

    name_null_as_default = field_validator("name", mode="before")(_null_as_default)


class ReferenceEntry(BaseModel):
    """Reference block for one sub-component (e.g. ``flux:modal.trigger``)."""

    model_config = ConfigDict(extra="allow")

    props: list[Prop] = Field(default_factory=list)

    props_null_as_default = field_validator("props", mode="before")(_null_as_default)


class Section(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = ""

    title_null_as_default = field_validator("title", mode="before")(_null_as_default)


class Record(BaseModel):
    """One documentation unit for a component, layout or guide.

    ``name`` is the storage key and is unique within its category.
    """

    model_config = ConfigDict(extra="allow")

    name: str = ""
    title: str | None = None
    description: str = ""
    category: Category | None = None
    pro: bool = False
    related: list[str] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)
    reference: dict[str, ReferenceEntry] = Field(default_factory=dict)

    nulls_as_defaults = field_validator("name", "description", "pro", "related", "sections", "reference", mode="before")(
        _null_as_default
    )

    @property
    def display_title(self) -> str:
        """Title for display, falling back to the capitalized name."""
        if self.title:
            return self.title
        return self.name[:1].upper() + self.name[1:]

    def section(self, title: str) -> Section | None:
        """Return the first section whose title matches case-insensitively."""
        wanted = title.strip().lower()
        for section in self.sections:
            if section.title.lower() == wanted:
                return section
        return None


class IndexEntry(BaseModel):
    """Denormalized search projection of a Record."""

    name: str
    title: str
    description: str = ""
    category: Category
    pro: bool = False
    keywords: list[str] = Field(default_factory=list)


class AggregateIndex(BaseModel):
    """Full-rebuild snapshot of every indexed record."""

    version: str = "1.0"
    updated_at: str
    items: list[IndexEntry] = Field(default_factory=list)


class SearchHit(IndexEntry):
    """Index entry annotated with its relevance score."""

    score: int
