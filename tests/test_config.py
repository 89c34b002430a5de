"""Tests for configuration loading."""

import pytest
import yaml

from leadgen.config import (
    CITY_COORDINATES,
    DEFAULT_BUSINESS_TYPES,
    SERVICE_CENTER,
    SERVICE_RADIUS_MILES,
    ScoringConfig,
    Settings,
    load_config,
)
from leadgen.models import GeoPoint


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LEADGEN_SERVICE_LAT",
        "LEADGEN_SERVICE_LNG",
        "LEADGEN_SERVICE_RADIUS",
        "LEADGEN_GEOCODER_URL",
        "LEADGEN_GEOCODER_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    """Test built-in defaults."""

    def test_service_area(self):
        settings = load_config()

        assert settings.service_center == SERVICE_CENTER == GeoPoint(47.1853, -122.2928)
        assert settings.service_radius_miles == SERVICE_RADIUS_MILES == 20.0
        assert settings.enforce_radius is False
        assert settings.min_score == 0
        assert settings.geocoder_url == ""

    def test_factor_maximums(self):
        config = ScoringConfig()
        top_priority = max(p.priority for p in DEFAULT_BUSINESS_TYPES) / 100

        assert config.overdue_weight == 40
        assert config.business_type_weight == 25
        assert config.distance_bands[0][1] == 20
        assert config.revenue_bands[0][1] == 10
        assert config.both_contacts_weight == 5
        assert top_priority <= 1

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CITY_COORDINATES["seattle"] = GeoPoint(47.6, -122.3)
        with pytest.raises(AttributeError):
            DEFAULT_BUSINESS_TYPES[0].priority = 10


class TestYamlConfig:
    """Test YAML overrides."""

    def test_file_values(self, tmp_path):
        path = tmp_path / "leadgen.yaml"
        path.write_text(yaml.safe_dump({
            "service_radius_miles": 35,
            "enforce_radius": True,
            "min_score": 60,
            "unknown_key": "ignored",
        }))

        settings = load_config(str(path))

        assert settings.service_radius_miles == 35
        assert settings.enforce_radius is True
        assert settings.min_score == 60
        assert not hasattr(settings, "unknown_key")

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yaml")) == Settings()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "leadgen.yaml"
        path.write_text("")

        assert load_config(str(path)).service_radius_miles == 20.0


class TestEnvironmentOverrides:
    """Environment variables win over file values."""

    def test_env_beats_file(self, tmp_path, monkeypatch):
        path = tmp_path / "leadgen.yaml"
        path.write_text("service_radius_miles: 35\n")
        monkeypatch.setenv("LEADGEN_SERVICE_RADIUS", "12.5")

        assert load_config(str(path)).service_radius_miles == 12.5

    def test_service_center(self, monkeypatch):
        monkeypatch.setenv("LEADGEN_SERVICE_LAT", "47.2529")
        monkeypatch.setenv("LEADGEN_SERVICE_LNG", "-122.4598")

        assert load_config().service_center == GeoPoint(47.2529, -122.4598)

    def test_geocoder(self, monkeypatch):
        monkeypatch.setenv("LEADGEN_GEOCODER_URL", "https://geocoder.test/search")
        monkeypatch.setenv("LEADGEN_GEOCODER_USER_AGENT", "acme-backflow/2.0")

        settings = load_config()

        assert settings.geocoder_url == "https://geocoder.test/search"
        assert settings.geocoder_user_agent == "acme-backflow/2.0"
