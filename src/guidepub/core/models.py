"""Guide metadata and document models shared by the parse, registry and index steps"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class Difficulty(str, Enum):
    """Ordered difficulty levels; compare with .rank"""
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)


class ExternalLink(BaseModel):
    """An outbound reference listed in a guide's front matter."""
    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    description: str = ""
    category: str = ""


class GuideMeta(BaseModel):
    """Typed front matter record. Unknown header keys are kept in `extra`."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    category: str
    slug: Optional[str] = None
    description: str = ""
    tags: tuple[str, ...] = ()
    published_at: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("publishedAt", "published_at", "date"),
        serialization_alias="publishedAt",
    )
    difficulty: Optional[Difficulty] = None
    external_links: tuple[ExternalLink, ...] = Field(
        default=(),
        validation_alias=AliasChoices("externalLinks", "external_links"),
        serialization_alias="externalLinks",
    )
    related_guides: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("relatedGuides", "related_guides"),
        serialization_alias="relatedGuides",
    )
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = _known_keys(cls)
        declared = data.get("extra")
        extra = dict(declared) if isinstance(declared, dict) else {}
        if declared is not None and not isinstance(declared, dict):
            extra["extra"] = declared
        fields = {}
        for key, value in data.items():
            if key == "extra":
                continue
            if key in known:
                fields[key] = value
            else:
                extra[key] = value
        fields["extra"] = extra
        return fields

    @field_validator("title", "category", "description", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("published_at", mode="before")
    @classmethod
    def _timestamp_to_date(cls, v: Any) -> Any:
        return v.date() if isinstance(v, datetime) else v

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lower_difficulty(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("tags", "related_guides", mode="before")
    @classmethod
    def _unique_strings(cls, v: Any) -> Any:
        """Accept a list or comma-separated string; drop blanks and repeats."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple)):
            return v
        return tuple(dict.fromkeys(str(s).strip() for s in v if s is not None and str(s).strip()))


def _known_keys(model: type[BaseModel]) -> set[str]:
    """Field names plus every validation alias they accept."""
    keys = set()
    for name, info in model.model_fields.items():
        keys.add(name)
        alias = info.validation_alias
        if isinstance(alias, AliasChoices):
            keys.update(c for c in alias.choices if isinstance(c, str))
        elif isinstance(alias, str):
            keys.add(alias)
    return keys


class Heading(BaseModel):
    """A table of contents entry with its rendered anchor id."""
    model_config = ConfigDict(frozen=True)

    level: int
    text: str
    anchor: str


class Document(BaseModel):
    """A parsed guide: front matter fields, body, and derived body facts."""
    model_config = ConfigDict(frozen=True)

    slug: str
    path: str
    title: str
    category: str
    description: str = ""
    tags: tuple[str, ...] = ()
    published_at: Optional[date] = None
    difficulty: Optional[Difficulty] = None
    external_links: tuple[ExternalLink, ...] = ()
    related_guides: tuple[str, ...] = ()
    extra: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    headings: tuple[Heading, ...] = ()
    reading_minutes: int = 1
    hash: str = ""


class RelatedGuide(BaseModel):
    """Summary of a resolved related guide."""
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str = ""
