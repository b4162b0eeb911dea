"""
Tests for YAML configuration loading.
"""

from pathlib import Path

import pytest

from bookinggrid.config import AppConfig, GridSettings, load_config
from bookinggrid.domain.models import GridConfig


def _write(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


class TestGridSettings:
    """Tests for GridSettings validation."""

    def test_defaults(self):
        settings = GridSettings()

        assert settings.to_grid_config() == GridConfig(start_hour=9, end_hour=17, slot_resolution_minutes=30)
        assert settings.booking_duration_minutes == 60

    def test_end_before_start_raises(self):
        with pytest.raises(ValueError, match="end_hour must be later"):
            GridSettings(start_hour=17, end_hour=9)

    def test_resolution_must_tile_span(self):
        with pytest.raises(ValueError, match="must divide"):
            GridSettings(slot_resolution_minutes=50)

    def test_default_duration_must_be_multiple(self):
        with pytest.raises(ValueError, match="multiple of slot_resolution_minutes"):
            GridSettings(booking_duration_minutes=45)


class TestAppConfig:
    """Tests for AppConfig.load_from_yaml."""

    def test_load_from_yaml(self, tmp_path):
        config_path = _write(
            tmp_path,
            "timezone: Europe/Berlin\n"
            "grid:\n"
            "  start_hour: 8\n"
            "  end_hour: 18\n"
            "  slot_resolution_minutes: 15\n"
            "  booking_duration_minutes: 45\n"
            "bookings_file: bookings.json\n",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "Europe/Berlin"
        assert config.grid.to_grid_config().slots_per_day() == 40
        assert config.bookings_file == tmp_path / "bookings.json"

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.timezone == "UTC"
        assert config.grid == GridSettings()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_non_mapping_raises(self, tmp_path):
        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(_write(tmp_path, "- 1\n- 2\n"))

    def test_invalid_yaml_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "grid: [unclosed\n"))

    def test_unknown_timezone_raises(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_load_config_explicit_path(self, tmp_path):
        config = load_config(_write(tmp_path, "timezone: UTC\n"))

        assert config.timezone == "UTC"
