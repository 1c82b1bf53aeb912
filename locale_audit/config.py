"""Settings for locale audits loaded from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_ENV_VAR = "LOCALE_AUDIT_CONFIG"


class LocalesConfig(BaseModel):
    """``site.locales`` block: available locale ids and the default one."""

    available: dict[str, str] = Field(default_factory=dict)
    default: str = "en_US"

    model_config = ConfigDict(extra="ignore")

    @field_validator("available", mode="before")
    @classmethod
    def _coerce_available(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, (list, tuple)):
            return {str(item): str(item) for item in value}
        if isinstance(value, dict):
            # Disabled locales are declared with a null/false display name.
            return {
                str(key): str(name)
                for key, name in value.items()
                if name is not None and name is not False
            }
        return value


class SiteConfig(BaseModel):
    locales: LocalesConfig = Field(default_factory=LocalesConfig)

    model_config = ConfigDict(extra="ignore")


class AuditConfig(BaseModel):
    preview_length: int = Field(default=255, ge=0)
    extensions: list[str] = Field(default_factory=lambda: [".json", ".yaml", ".yml"])

    model_config = ConfigDict(extra="ignore")

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]


class AuditSettings(BaseModel):
    """Top-level configuration document."""

    site: SiteConfig = Field(default_factory=SiteConfig)
    sprinkles: list[str] | None = None
    audit: AuditConfig = Field(default_factory=AuditConfig)

    model_config = ConfigDict(extra="ignore")

    @property
    def available_locales(self) -> list[str]:
        return list(self.site.locales.available)

    @property
    def base_locale(self) -> str:
        return self.site.locales.default


def load_settings(path: Path | str | None = None) -> AuditSettings:
    """Load settings from *path*, ``$LOCALE_AUDIT_CONFIG`` or defaults."""

    if path is None:
        path = os.getenv(CONFIG_ENV_VAR) or None
    if path is None:
        return AuditSettings()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config YAML must contain a mapping: {path}")
    try:
        return AuditSettings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid config {path}: {exc}") from exc


__all__ = ["AuditSettings", "CONFIG_ENV_VAR", "load_settings"]
