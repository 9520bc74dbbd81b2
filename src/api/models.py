# src/api/models.py — v2
"""API-level models: RewriteOptions, RewriteResult."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from tikzembed.core.models import RewriteReport


class RewriteOptions(BaseModel):
    """Per-document overrides — validated subset of Settings."""

    host_syntax: Literal["plain", "fenced"] | None = None
    diagram_environments: str | None = None
    placeholder_prefix: str | None = None
    placeholder_suffix: str | None = None
    latex_packages: str | None = None


class RewriteResult(BaseModel):
    """Outcome of rewriting one document."""

    text: str
    report: RewriteReport
    output_path: Path | None = None
    assets: list[Path] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.report.has_failures
