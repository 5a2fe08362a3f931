"""Configuration models for newsbrief.

Settings holds the user-editable settings document (model provider, model
names, vault location).  The on-disk document uses camelCase keys; Python
code uses the snake_case attributes.
"""

from __future__ import annotations

import enum
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from newsbrief.exceptions import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = "settings.json"
DEFAULT_SOURCES_PATH = "sources.json"
DEFAULT_VAULT_PATH = "./obsidian_vault"

# Environment variable -> Settings field, used when no settings file exists.
_ENV_FIELDS: dict[str, str] = {
    "MODEL_PROVIDER": "model_provider",
    "OPENAI_MODEL": "openai_model",
    "ANTHROPIC_MODEL": "anthropic_model",
    "GOOGLE_MODEL": "google_model",
    "OBSIDIAN_PATH": "obsidian_path",
}


class ModelProvider(str, enum.Enum):
    """Supported reasoning backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


class Settings(BaseModel):
    """The settings document."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True,
        protected_namespaces=(),
    )

    model_provider: ModelProvider = Field(ModelProvider.OPENAI, alias="modelProvider")
    openai_model: Optional[str] = Field("gpt-4o", alias="openaiModel")
    anthropic_model: Optional[str] = Field(
        "claude-3-5-sonnet-20241022", alias="anthropicModel"
    )
    google_model: Optional[str] = Field("gemini-2.0-flash-exp", alias="googleModel")
    obsidian_path: Optional[str] = Field(DEFAULT_VAULT_PATH, alias="obsidianPath")

    @property
    def provider(self) -> str:
        """The selected provider as a plain string."""
        value = self.model_provider
        return value.value if isinstance(value, ModelProvider) else str(value)

    @property
    def model_name(self) -> str:
        """The model name configured for the selected provider."""
        if self.provider == ModelProvider.ANTHROPIC.value:
            return self.anthropic_model or "claude-3-5-sonnet-20241022"
        if self.provider == ModelProvider.GOOGLE.value:
            return self.google_model or "gemini-2.0-flash-exp"
        return self.openai_model or "gpt-4o"

    @property
    def vault_path(self) -> Path:
        """Directory reports are written to.

        ``OBSIDIAN_PATH`` in the environment wins over the document.
        """
        return Path(
            os.environ.get("OBSIDIAN_PATH") or self.obsidian_path or DEFAULT_VAULT_PATH
        )

    def to_document(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on disk."""
        return self.model_dump(by_alias=True, mode="json")


def load_settings(path: str | Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Read the settings document, falling back to environment and defaults.

    Args:
        path: Location of the settings JSON document.

    Returns:
        Settings with file values layered over defaults, or environment
        values layered over defaults when the file does not exist.

    Raises:
        SettingsError: If the file exists but is not valid JSON or does not
            validate against the Settings model.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        overrides = {
            field: os.environ[var] for var, field in _ENV_FIELDS.items() if os.environ.get(var)
        }
        logger.debug("No settings file at %s; using environment overrides %s", path, sorted(overrides))
        return _validate(overrides, source="environment")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Settings document {path} must be a JSON object")
    return _validate(data, source=str(path))


def save_settings(settings: Settings, path: str | Path = DEFAULT_SETTINGS_PATH) -> None:
    """Write the settings document with camelCase keys."""
    path = Path(path)
    path.write_text(json.dumps(settings.to_document(), indent=2), encoding="utf-8")


def _validate(data: dict[str, Any], *, source: str) -> Settings:
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings from {source}: {exc}") from exc
