# tests/unit/config/test_settings.py — v2
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from tikzembed.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_tools(self):
        s = Settings(_env_file=None)
        assert s.latex_engine == "lualatex"
        assert s.svg_converter == "pdf2svg"

    def test_default_placeholder(self):
        s = Settings(_env_file=None)
        assert s.placeholder_prefix == "generated_tikz_"
        assert s.placeholder_suffix == ".svg"

    def test_default_environments(self):
        s = Settings(_env_file=None)
        assert s.diagram_environments_list == ["tikzpicture", "tikzcd"]
        assert s.host_syntax == "plain"

    def test_default_template(self):
        s = Settings(_env_file=None)
        assert s.document_class == "standalone"
        assert s.document_class_options == "tikz"
        assert s.latex_packages_list == ["tikz-cd"]

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "text"
        assert s.log_file is None


class TestSettingsValidation:
    def test_v01_no_environment(self):
        with pytest.raises(ConfigurationError, match="at least one"):
            Settings(_env_file=None, diagram_environments=" , ")

    def test_v02_bad_environment_name(self):
        with pytest.raises(ConfigurationError, match="not a valid name"):
            Settings(_env_file=None, diagram_environments="tikzpicture,foo[bar")

    def test_v03_empty_prefix(self):
        with pytest.raises(ConfigurationError, match="non-empty"):
            Settings(_env_file=None, placeholder_prefix="")

    def test_v03_prefix_with_separator(self):
        with pytest.raises(ConfigurationError, match="path separators"):
            Settings(_env_file=None, placeholder_prefix="assets/tikz_")

    def test_v03_suffix_with_quote(self):
        with pytest.raises(ConfigurationError, match="PLACEHOLDER_SUFFIX must not contain"):
            Settings(_env_file=None, placeholder_suffix='".svg')

    def test_v03_suffix_with_separator(self):
        with pytest.raises(ConfigurationError, match="PLACEHOLDER_SUFFIX must not contain"):
            Settings(_env_file=None, placeholder_suffix="/x.svg")

    def test_v04_empty_engine(self):
        with pytest.raises(ConfigurationError, match="LATEX_ENGINE"):
            Settings(_env_file=None, latex_engine="  ")

    def test_negative_retention(self):
        with pytest.raises(ValueError, match="log_retention"):
            Settings(_env_file=None, log_retention=-1)

    def test_bad_syntax(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, host_syntax="markdown")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, latex_engine="pdflatex")
        assert s.latex_engine == "pdflatex"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("HOST_SYNTAX", "fenced")
        monkeypatch.setenv("LATEX_PACKAGES", "tikz-cd,circuitikz")
        s = load_settings(_env_file=None)
        assert s.host_syntax == "fenced"
        assert s.latex_packages_list == ["tikz-cd", "circuitikz"]

    def test_env_file(self, tmp_path: Path):
        env = tmp_path / ".env"
        env.write_text("SVG_CONVERTER=dvisvgm\nLOG_FORMAT=json\n", encoding="utf-8")
        s = load_settings(_env_file=str(env))
        assert s.svg_converter == "dvisvgm"
        assert s.log_format == "json"
