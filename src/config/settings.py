# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for tool names, placeholder shape, document template
and logging. Every field can be set through an environment variable of the
same name (case-insensitive), e.g. ``LATEX_ENGINE=lualatex``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9*]*$")
_FORBIDDEN_NAME_CHARS = ('"', "/", "\\")


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === External tools ===
    latex_engine: str = "lualatex"
    svg_converter: str = "pdf2svg"

    # === Host syntax ===
    diagram_environments: str = "tikzpicture,tikzcd"
    host_syntax: Literal["plain", "fenced"] = "plain"

    # === Placeholder shape ===
    placeholder_prefix: str = "generated_tikz_"
    placeholder_suffix: str = ".svg"

    # === Document template ===
    document_class: str = "standalone"
    document_class_options: str = "tikz"
    latex_packages: str = "tikz-cd"

    # === Session ===
    scratch_root: Path | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("log_retention")
    @classmethod
    def validate_log_retention(cls, v: int) -> int:
        if v < 0:
            raise ValueError("log_retention must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency rules V-01 to V-04."""
        errors: list[str] = []

        # V-01
        environments = self.diagram_environments_list
        if not environments:
            errors.append("DIAGRAM_ENVIRONMENTS must name at least one environment")

        # V-02
        for name in environments:
            if not _IDENTIFIER_RE.match(name):
                errors.append(f"DIAGRAM_ENVIRONMENTS entry {name!r} is not a valid name")

        # V-03
        if not self.placeholder_prefix or not self.placeholder_suffix:
            errors.append("PLACEHOLDER_PREFIX and PLACEHOLDER_SUFFIX must be non-empty")
        else:
            for field, value in (
                ("PLACEHOLDER_PREFIX", self.placeholder_prefix),
                ("PLACEHOLDER_SUFFIX", self.placeholder_suffix),
            ):
                if any(c in value for c in _FORBIDDEN_NAME_CHARS):
                    errors.append(f"{field} must not contain quotes or path separators")

        # V-04
        if not self.latex_engine.strip() or not self.svg_converter.strip():
            errors.append("LATEX_ENGINE and SVG_CONVERTER must be non-empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def diagram_environments_list(self) -> list[str]:
        """Parse comma-separated diagram environments."""
        return [e.strip() for e in self.diagram_environments.split(",") if e.strip()]

    @property
    def latex_packages_list(self) -> list[str]:
        """Parse comma-separated LaTeX packages."""
        return [p.strip() for p in self.latex_packages.split(",") if p.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-document config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
