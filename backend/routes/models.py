"""Pydantic request models for API endpoints.

Paths travel in request bodies (they are absolute filesystem paths).
Field names are camelCase on the wire like the files on disk.
"""

from typing import Any

from pydantic import Field

from resource_manager.models import AIServiceConfig, CamelModel, ContentFile, MetaConfig


class DataDirBody(CamelModel):
    data_dir: str


class ResourcePathBody(CamelModel):
    resource_path: str


class ResourcePathsBody(CamelModel):
    resource_paths: list[str]


class SaveManifestBody(CamelModel):
    resource_path: str
    manifest: dict[str, Any]


class CreateResourceBody(CamelModel):
    data_dir: str
    category: str
    id: str
    manifest: dict[str, Any]
    content_files: list[ContentFile] = Field(default_factory=list)


class ReorderBody(CamelModel):
    id_order_pairs: list[tuple[str, int]]


class BatchEnabledBody(CamelModel):
    resource_paths: list[str]
    enabled: bool


class BatchMoveBody(CamelModel):
    resource_paths: list[str]
    new_category: str


class FilePathBody(CamelModel):
    file_path: str


class SaveContentBody(CamelModel):
    file_path: str
    content: str


class SaveMetaBody(CamelModel):
    data_dir: str
    meta: MetaConfig


class ExportBody(CamelModel):
    resource_paths: list[str]
    output_path: str


class ImportBody(CamelModel):
    zip_path: str
    data_dir: str


class TemplateRefBody(CamelModel):
    data_dir: str
    category_key: str
    template_id: str


class SaveTemplateBody(TemplateRefBody):
    name: str
    description: str = ""
    content: str = ""
    variables: list[str] = Field(default_factory=list)


class CreateTemplateBody(CamelModel):
    data_dir: str
    category_key: str
    id: str
    name: str
    description: str = ""
    content: str = ""
    variables: list[str] = Field(default_factory=list)


class BatchDeleteTemplatesBody(CamelModel):
    data_dir: str
    paths: list[str]


class ReorderTemplatesBody(CamelModel):
    data_dir: str
    category_key: str
    id_order_pairs: list[tuple[str, int]]


class MoveTemplateBody(CamelModel):
    data_dir: str
    from_category: str
    template_id: str
    to_category: str


class SaveCategoryBody(CamelModel):
    data_dir: str
    category_key: str
    name: str
    icon: str = ""
    order: int = 0


class GenerateBody(CamelModel):
    config: AIServiceConfig
    system_prompt: str
    user_prompt: str


class BuildBody(CamelModel):
    repo_dir: str
