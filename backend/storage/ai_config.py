"""AI service settings persisted in the user's config directory.

  ~/.aidocplus/                   ($AIDOCPLUS_HOME overrides)
    manager-ai-config.json        single service used by the manager
    manager-ai-services.json      manager-local service list
    ai-services.json              list owned by the main app (read-only here)

A missing file means "use defaults". The directory is created on first write.
"""

import os
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from resource_manager.models import (
    AIServiceConfig,
    LocalAIServices,
    SharedAIServices,
)

from .core import StorageError, read_json, write_json

CONFIG_DIR_NAME = ".aidocplus"
AI_CONFIG_FILE = "manager-ai-config.json"
LOCAL_SERVICES_FILE = "manager-ai-services.json"
SHARED_SERVICES_FILE = "ai-services.json"

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.7

ModelT = TypeVar("ModelT", bound=BaseModel)


def default_config_dir() -> Path:
    env = os.getenv("AIDOCPLUS_HOME")
    if env:
        return Path(env)
    return Path.home() / CONFIG_DIR_NAME


def _resolve(config_dir: Path | str | None) -> Path:
    return Path(config_dir) if config_dir is not None else default_config_dir()


def _load(path: Path, model: type[ModelT], default: ModelT) -> ModelT:
    if not path.exists():
        return default
    data = read_json(path, path.name)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise StorageError(f"Failed to parse {path.name}: {e}") from e


def _save(path: Path, value: BaseModel) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Failed to create config directory: {e}") from e
    write_json(path, value.model_dump(by_alias=True), path.name)


def default_ai_config() -> AIServiceConfig:
    return AIServiceConfig(
        base_url="https://api.openai.com/v1",
        api_key="",
        model="gpt-4o",
        max_tokens=DEFAULT_MAX_TOKENS,
        temperature=DEFAULT_TEMPERATURE,
    )


def load_ai_config(config_dir: Path | str | None = None) -> AIServiceConfig:
    return _load(_resolve(config_dir) / AI_CONFIG_FILE, AIServiceConfig, default_ai_config())


def save_ai_config(config: AIServiceConfig, config_dir: Path | str | None = None) -> None:
    _save(_resolve(config_dir) / AI_CONFIG_FILE, config)


def load_shared_ai_services(config_dir: Path | str | None = None) -> SharedAIServices:
    default = SharedAIServices(
        temperature=DEFAULT_TEMPERATURE, max_tokens=DEFAULT_MAX_TOKENS
    )
    return _load(_resolve(config_dir) / SHARED_SERVICES_FILE, SharedAIServices, default)


def load_local_ai_services(config_dir: Path | str | None = None) -> LocalAIServices:
    return _load(_resolve(config_dir) / LOCAL_SERVICES_FILE, LocalAIServices, LocalAIServices())


def save_local_ai_services(
    services: LocalAIServices, config_dir: Path | str | None = None
) -> None:
    _save(_resolve(config_dir) / LOCAL_SERVICES_FILE, services)


def active_service_config(services: LocalAIServices) -> AIServiceConfig | None:
    """The request config of the active local service, or None if unset/unknown."""
    for item in services.services:
        if item.id == services.active_service_id:
            return AIServiceConfig(
                base_url=item.base_url,
                api_key=item.api_key,
                model=item.model,
                max_tokens=item.max_tokens,
                temperature=item.temperature,
            )
    return None
