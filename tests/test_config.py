"""Unit tests for the shared configuration module."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from pathlib import Path

from prop_scraper import config


class TestPaths:

    def test_root_is_project_root(self):
        """ROOT should point to the project root (contains pyproject.toml)."""
        assert (config.ROOT / "pyproject.toml").exists()

    def test_export_dir_is_path(self):
        assert isinstance(config.EXPORT_DIR, Path)

    def test_sites_file_is_json(self):
        assert config.SITES_FILE.suffix == ".json"


class TestServerSettings:

    def test_port_is_int(self):
        assert isinstance(config.PORT, int)

    def test_log_format_names_logger(self):
        assert "%(name)s" in config.LOG_FORMAT
