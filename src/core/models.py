# src/core/models.py — v2
"""Shared Pydantic domain models used across modules.

No module redefines these types — all imports come from core.models.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# === DOCUMENT MODELS ===


class DiagramBlock(BaseModel):
    """A diagram located in host document text (one extraction pass only)."""

    model_config = ConfigDict(frozen=True)

    environment: str
    source: str
    start: int
    end: int
    lines: int = 0  # newlines inside a fenced payload, re-emitted after the placeholder


# === RENDER RESULTS ===


class Rendered(BaseModel):
    """Successful render: raw SVG bytes."""

    model_config = ConfigDict(frozen=True)

    status: Literal["rendered"] = "rendered"
    data: bytes

    @property
    def ok(self) -> bool:
        return True


class Failed(BaseModel):
    """Failed render with the diagnostic captured during the attempt."""

    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    kind: Literal["spawn", "execution", "io"]
    message: str

    @property
    def ok(self) -> bool:
        return False


RenderResult = Union[Rendered, Failed]


class CommandOutcome(BaseModel):
    """Tagged result of one external tool invocation."""

    model_config = ConfigDict(frozen=True)

    status: Literal["ok", "spawn_error", "exit_error"]
    program: str
    output: str = ""
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


# === IMAGE METADATA ===


class WidthUnit(str, Enum):
    """Length units a rendered diagram may declare."""

    EM = "em"
    POINT = "pt"
    CENTIMETER = "cm"
    MILLIMETER = "mm"
    INCH = "in"
    PERCENT = "%"


class Width(BaseModel):
    """Declared intrinsic width of a rendered image."""

    model_config = ConfigDict(frozen=True)

    value: float
    unit: WidthUnit


# === REPORTING ===


class FailureRecord(BaseModel):
    """One failed diagram as seen by a rewrite pass."""

    fingerprint: int
    environment: str
    kind: str
    message: str


class RewriteReport(BaseModel):
    """Summary of one rewrite pass."""

    block_count: int = 0
    distinct_fingerprints: int = 0
    cache_hits: int = 0
    rendered: int = 0
    failures: list[FailureRecord] = Field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)
