from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.settings import get_settings


def test_defaults(monkeypatch) -> None:
    for name in ("DATABASE_URL", "LOG_LEVEL", "RECALCULATION_DRY_RUN", "DEFAULT_OUTSHOT_TYPE"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.database_url == "sqlite:///darts.db"
    assert settings.recalculation_dry_run is True
    assert settings.recalculation_since == "(All Time)"
    assert settings.default_outshot_type == 1


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("RECALCULATION_DRY_RUN", "false")
    monkeypatch.setenv("DEFAULT_STARTING_LIVES", "5")

    settings = get_settings()

    assert settings.log_level == "DEBUG"
    assert settings.recalculation_dry_run is False
    assert settings.default_starting_lives == 5


@pytest.mark.parametrize(
    ("name", "value"),
    [("LOG_LEVEL", "verbose"), ("LOG_FORMAT", "xml"), ("DEFAULT_OUTSHOT_TYPE", "4")],
)
def test_invalid_values_are_rejected(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        get_settings()
