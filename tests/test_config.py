"""Tests for project configuration."""

import json

import pytest

from constref.config import CONFIG_ENV_VAR, CONFIG_FILE, ProjectConfig, load_config
from constref.errors import ConfigError
from constref.extractor import Extractor

from .conftest import write_files


class TestLoadConfig:
    """Tests for locating and validating .constref.json."""

    def test_defaults_without_file(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        config = load_config(temp_dir)

        assert config == ProjectConfig()
        assert config.inspectors == ["constant"]
        assert config.autoload_roots == []

    def test_reads_project_file(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (temp_dir / CONFIG_FILE).write_text(
            json.dumps(
                {
                    "autoload_roots": [
                        {"path": "app/models"},
                        {"path": "engines/admin", "namespace": "Admin"},
                    ],
                    "collapse": ["app/models/records"],
                    "inflections": {"acronyms": ["HTML"], "overrides": {"oauth": "OAuth"}},
                    "inspectors": ["constant", "association"],
                }
            )
        )

        config = load_config(temp_dir)

        roots = config.roots_for(temp_dir)
        assert [(r.path, r.namespace) for r in roots] == [
            ("app/models", ()),
            ("engines/admin", ("Admin",)),
        ]
        assert config.collapse == ["app/models/records"]
        assert config.inflector().camelize("html_parser") == "HTMLParser"
        assert config.inflector().camelize("oauth") == "OAuth"
        assert config.inspectors == ["constant", "association"]

    def test_env_var_overrides_location(self, temp_dir, monkeypatch):
        other = temp_dir / "elsewhere.json"
        other.write_text(json.dumps({"ignore": ["lib/tasks"]}))
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))

        assert load_config(temp_dir).ignore == ["lib/tasks"]

    def test_explicit_missing_file_raises(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir, temp_dir / "missing.json")
        assert "file not found" in str(exc_info.value)

    def test_invalid_json_raises(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (temp_dir / CONFIG_FILE).write_text("{not json")

        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir)
        assert "invalid JSON" in exc_info.value.reason

    def test_unknown_inspector_raises(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (temp_dir / CONFIG_FILE).write_text(json.dumps({"inspectors": ["magic"]}))

        with pytest.raises(ConfigError) as exc_info:
            load_config(temp_dir)
        assert "magic" in str(exc_info.value)

    def test_wrong_type_raises(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        (temp_dir / CONFIG_FILE).write_text(json.dumps({"autoload_roots": "app/models"}))

        with pytest.raises(ConfigError):
            load_config(temp_dir)


class TestExtractorFromConfig:
    def test_configured_roots_and_inspectors(self, temp_dir, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        write_files(
            temp_dir,
            {
                "engines/admin/report.rb": "",
                "engines/admin/html_export.rb": "",
                CONFIG_FILE: json.dumps(
                    {
                        "autoload_roots": [{"path": "engines/admin", "namespace": "Admin"}],
                        "inflections": {"acronyms": ["HTML"]},
                        "inspectors": ["constant", "association"],
                    }
                ),
            },
        )

        extractor = Extractor.from_project(temp_dir)
        source = 'module Admin\n  class Dashboard\n    has_one :report, class_name: "Report"\n    HTMLExport\n  end\nend\n'
        refs = extractor.references_from_string(source)

        assert [(r.constant.name, r.constant.location) for r in refs] == [
            ("Admin::Report", "engines/admin/report.rb"),
            ("Admin::HTMLExport", "engines/admin/html_export.rb"),
        ]
