# tests/unit/render/test_svg_metadata.py — v1
"""Tests for render/svg_metadata.py — declared width parsing and formatting."""

from __future__ import annotations

import pytest

from tikzembed.core.errors import MetadataInconsistencyError
from tikzembed.core.models import Width, WidthUnit
from tikzembed.render.svg_metadata import format_width, read_width, width_string


class TestReadWidth:
    @pytest.mark.parametrize("raw,value,unit", [
        ("3cm", 3.0, WidthUnit.CENTIMETER),
        ("12pt", 12.0, WidthUnit.POINT),
        ("12.5pt", 12.5, WidthUnit.POINT),
        ("1.5em", 1.5, WidthUnit.EM),
        ("25mm", 25.0, WidthUnit.MILLIMETER),
        ("2in", 2.0, WidthUnit.INCH),
        ("50%", 50.0, WidthUnit.PERCENT),
        (" 7 pt ", 7.0, WidthUnit.POINT),
    ])
    def test_supported_units(self, svg_factory, raw, value, unit):
        assert read_width(svg_factory(width=raw)) == Width(value=value, unit=unit)

    def test_unitless_is_points(self, svg_factory):
        assert read_width(svg_factory(width="85.04")).unit is WidthUnit.POINT

    def test_accepts_str(self, svg_factory):
        text = svg_factory(width="4cm").decode()
        assert read_width(text).value == 4.0

    @pytest.mark.parametrize("raw", ["100px", "3ex", "2pc"])
    def test_unsupported_unit_is_fatal(self, svg_factory, raw):
        with pytest.raises(MetadataInconsistencyError, match="Unsupported"):
            read_width(svg_factory(width=raw))

    def test_missing_width(self):
        with pytest.raises(MetadataInconsistencyError, match="no width"):
            read_width(b'<svg xmlns="http://www.w3.org/2000/svg"/>')

    def test_garbage_width(self, svg_factory):
        with pytest.raises(MetadataInconsistencyError, match="Unparseable"):
            read_width(svg_factory(width="wide"))

    def test_not_xml(self):
        with pytest.raises(MetadataInconsistencyError, match="not valid SVG"):
            read_width(b"%PDF-1.5")

    def test_not_svg_root(self):
        with pytest.raises(MetadataInconsistencyError, match="expected <svg>"):
            read_width(b'<html width="3cm"/>')


class TestFormatWidth:
    @pytest.mark.parametrize("value,unit,expected", [
        (3.0, WidthUnit.CENTIMETER, "3cm"),
        (12.0, WidthUnit.POINT, "12pt"),
        (12.5, WidthUnit.POINT, "12.5pt"),
        (0.1, WidthUnit.INCH, "0.1in"),
        (100.0, WidthUnit.PERCENT, "100%"),
        (0.00001, WidthUnit.EM, "0.00001em"),
    ])
    def test_format(self, value, unit, expected):
        assert format_width(Width(value=value, unit=unit)) == expected

    def test_width_string(self, svg_factory):
        assert width_string(svg_factory(width="3cm")) == "3cm"
