import pytest

from sitekit.date import DateConfig, SiteDate

# Wednesday 2024-01-03 12:00:00 in Europe/Moscow (09:00:00 UTC).
FIXED_EPOCH = 1704272400


def _broken_clock() -> float:
    raise OSError("clock unavailable")


def _crashing_clock() -> float:
    raise RuntimeError("clock crashed")


@pytest.fixture
def fixed_epoch():
    """Epoch seconds the `cfg` clock is frozen at."""
    return FIXED_EPOCH


@pytest.fixture
def cfg(fixed_epoch):
    """Default zone with a clock frozen at `fixed_epoch`."""
    return DateConfig(clock=lambda: float(fixed_epoch))


@pytest.fixture
def broken_cfg():
    """Default zone with a clock that always fails with OSError."""
    return DateConfig(clock=_broken_clock)


@pytest.fixture
def crashing_cfg():
    """Default zone with a clock that fails with an arbitrary exception."""
    return DateConfig(clock=_crashing_clock)


@pytest.fixture
def make(cfg):
    """Build a SiteDate from a "YYYY-MM-DD HH:MM:SS" string under `cfg`."""
    def _make(text, timezone=None):
        return SiteDate(text, "db_datetime", timezone=timezone, config=cfg)
    return _make
