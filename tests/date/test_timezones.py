"""
tests/date/test_timezones.py

Covers:
  - Allow-list contents
  - is_valid_timezone / resolve_timezone
  - Allow-listed zones load from the zone database
"""

from zoneinfo import ZoneInfo

import pytest

from sitekit.date.timezones import (
    DEFAULT_TIMEZONE,
    is_valid_timezone,
    list_valid_timezones,
    load_zone,
    resolve_timezone,
)

REGIONS = {
    "Africa", "America", "Antarctica", "Arctic", "Asia",
    "Atlantic", "Australia", "Europe", "Indian", "Pacific",
}


class TestAllowList:

    def test_size(self):
        assert len(list_valid_timezones()) == 424

    def test_contains_common_zones(self):
        zones = list_valid_timezones()
        for name in ("Europe/Moscow", "America/New_York", "Asia/Tokyo", "Australia/Sydney"):
            assert name in zones

    def test_no_bare_or_legacy_names(self):
        zones = list_valid_timezones()
        assert "UTC" not in zones
        assert "GMT" not in zones
        assert "US/Eastern" not in zones

    def test_every_name_is_regional(self):
        for name in list_valid_timezones():
            assert name.split("/", 1)[0] in REGIONS, name

    def test_is_immutable(self):
        assert isinstance(list_valid_timezones(), frozenset)


class TestValidation:

    def test_is_valid(self):
        assert is_valid_timezone("Europe/Paris")
        assert not is_valid_timezone("Europe/Atlantis")
        assert not is_valid_timezone(None)

    def test_resolve_keeps_valid(self):
        assert resolve_timezone("Europe/Paris") == "Europe/Paris"

    @pytest.mark.parametrize("name", [None, "", "Europe/Atlantis"])
    def test_resolve_substitutes_default(self, name):
        assert resolve_timezone(name) == DEFAULT_TIMEZONE
        assert resolve_timezone(name, "Asia/Tokyo") == "Asia/Tokyo"

    def test_resolve_rejects_invalid_default(self):
        assert resolve_timezone(None, "Nowhere/Special") == DEFAULT_TIMEZONE


class TestLoading:

    @pytest.mark.parametrize("name", ["Europe/Moscow", "America/Argentina/Buenos_Aires", "Pacific/Tahiti"])
    def test_load_zone(self, name):
        zone = load_zone(name)
        assert isinstance(zone, ZoneInfo)
        assert zone.key == name
