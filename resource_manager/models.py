"""Core domain models.

Every storage function and the AI client operate on these types. On disk
and over the API the fields are camelCase (``majorCategory``,
``createdAt``); in Python they are snake_case. Pydantic handles the mapping
at every data boundary.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for models stored as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

class ResourceSummary(CamelModel):
    """One row of a resource listing. Derived from a manifest, never stored."""

    id: str
    name: str = ""
    description: str = ""
    icon: str = ""
    major_category: str = ""
    sub_category: str = ""
    tags: list[str] = Field(default_factory=list)
    order: int = 0
    enabled: bool = True
    source: str = "builtin"
    path: str  # filesystem location (or "key::id" in JSON-template mode)


class Manifest(CamelModel):
    """The ``manifest.json`` descriptor of a resource directory.

    Keys this model does not know about are kept in ``model_extra`` and
    written back unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    id: str
    name: str = ""
    description: str = ""
    icon: str = ""
    version: str = ""
    author: str | dict[str, Any] | None = ""
    resource_type: str = ""
    major_category: str = ""
    sub_category: str = ""
    tags: list[str] = Field(default_factory=list)
    order: int = 0
    enabled: bool = True
    source: str = "builtin"
    roles: list[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @property
    def author_name(self) -> str:
        if isinstance(self.author, dict):
            name = self.author.get("name")
            return name if isinstance(name, str) else ""
        return self.author or ""

    def to_summary(self, path: str) -> ResourceSummary:
        return ResourceSummary(
            id=self.id,
            name=self.name,
            description=self.description,
            icon=self.icon,
            major_category=self.major_category,
            sub_category=self.sub_category,
            tags=list(self.tags),
            order=self.order,
            enabled=self.enabled,
            source=self.source,
            path=path,
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ContentFile(CamelModel):
    """A content file written next to a new resource's manifest."""

    filename: str
    content: str


# ---------------------------------------------------------------------------
# _meta.json category structure
# ---------------------------------------------------------------------------

class SubCategoryDefinition(CamelModel):
    key: str
    name: str
    icon: str | None = None
    order: int = 0


class CategoryDefinition(CamelModel):
    key: str
    name: str
    icon: str | None = None
    order: int = 0
    sub_categories: list[SubCategoryDefinition] = Field(default_factory=list)


class MetaConfig(CamelModel):
    schema_version: str = ""
    resource_type: str = ""
    categories: list[CategoryDefinition] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# JSON-template mode: one file per category
# ---------------------------------------------------------------------------

class TemplateEntry(CamelModel):
    id: str
    name: str = ""
    description: str = ""
    content: str = ""
    variables: list[str] = Field(default_factory=list)
    order: int = 0


class CategoryFile(CamelModel):
    """``<categoryKey>.json`` holding a whole category and its templates."""

    key: str
    name: str
    icon: str = ""
    order: int = 0
    templates: list[TemplateEntry] = Field(default_factory=list)


class TemplateDetail(CamelModel):
    """A template plus the category it lives in, as the editor needs it."""

    id: str
    name: str
    description: str
    content: str
    variables: list[str] = Field(default_factory=list)
    order: int
    category_key: str
    category_name: str


# ---------------------------------------------------------------------------
# Import / export
# ---------------------------------------------------------------------------

class ImportFailure(CamelModel):
    id: str
    error: str


class ImportResult(CamelModel):
    imported: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[ImportFailure] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# AI service configuration
# ---------------------------------------------------------------------------

class AIServiceConfig(CamelModel):
    """Connection settings for one chat-completion request."""

    base_url: str
    api_key: str
    model: str
    max_tokens: int = 0  # 0 = let the service decide
    temperature: float = 0.7


class SharedAIServiceItem(CamelModel):
    id: str
    name: str = ""
    provider: str = ""
    api_key: str = ""
    model: str = ""
    base_url: str = ""
    enabled: bool = True


class SharedAIServices(CamelModel):
    """Service list owned by the main application (read-only here)."""

    services: list[SharedAIServiceItem] = Field(default_factory=list)
    active_service_id: str = ""
    temperature: float = 0.7
    max_tokens: int = 0


class LocalAIServiceItem(CamelModel):
    id: str
    name: str = ""
    provider: str = ""
    base_url: str = ""
    api_key: str = ""
    model: str = ""
    max_tokens: int = 0
    temperature: float = 0.7


class LocalAIServices(CamelModel):
    """Service list private to the resource manager."""

    services: list[LocalAIServiceItem] = Field(default_factory=list)
    active_service_id: str = ""


StreamEventType = Literal["delta", "done"]


class StreamEvent(BaseModel):
    """One event republished from a streamed chat completion."""

    type: StreamEventType
    content: str
