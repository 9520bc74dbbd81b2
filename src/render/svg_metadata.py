# src/render/svg_metadata.py — v1
"""Read the declared width of a rendered SVG and format it for the host.

Only em, pt, cm, mm, in and % are representable in the host's length syntax.
Anything else (px, ex, pc, a missing width, bytes that are not SVG) means
the converter produced output the pipeline does not understand, which is
reported as ``MetadataInconsistencyError`` rather than a render failure.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET

from tikzembed.core.errors import MetadataInconsistencyError
from tikzembed.core.models import Width, WidthUnit

_LENGTH_RE = re.compile(
    r"^\s*(?P<value>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<unit>[A-Za-z%]*)\s*$"
)

# pdf2svg writes unitless width/height whose numbers are points.
_UNITLESS = WidthUnit.POINT


def read_width(svg: bytes | str) -> Width:
    """Parse the root ``<svg width="...">`` attribute.

    Raises:
        MetadataInconsistencyError: Not an SVG, no width, or unsupported unit.
    """
    try:
        root = ET.fromstring(svg)
    except ET.ParseError as exc:
        raise MetadataInconsistencyError(f"Rendered image is not valid SVG: {exc}") from exc

    tag = root.tag.split("}", 1)[1] if root.tag.startswith("{") else root.tag
    if tag != "svg":
        raise MetadataInconsistencyError(f"Rendered image root is <{tag}>, expected <svg>")

    raw = root.get("width")
    if raw is None:
        raise MetadataInconsistencyError("Rendered SVG declares no width")

    match = _LENGTH_RE.match(raw)
    if not match:
        raise MetadataInconsistencyError(f"Unparseable SVG width: {raw!r}")

    unit_tag = match.group("unit").lower()
    if not unit_tag:
        unit = _UNITLESS
    else:
        try:
            unit = WidthUnit(unit_tag)
        except ValueError:
            raise MetadataInconsistencyError(
                f"Unsupported SVG-generated unit: {unit_tag!r}"
            ) from None

    return Width(value=float(match.group("value")), unit=unit)


def format_width(width: Width) -> str:
    """Format as ``<number><unit>``, e.g. ``3cm`` or ``12.5pt``."""
    return f"{_format_number(width.value)}{width.unit.value}"


def width_string(svg: bytes | str) -> str:
    """``format_width(read_width(svg))``."""
    return format_width(read_width(svg))


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = f"{value:.12f}".rstrip("0").rstrip(".")
    return text
