"""Settings — environment parsing and defaults."""

import pytest

from newsboard.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("IS_TEST_MODE", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.port == 4000
    assert settings.is_test_mode is False
    assert settings.database_path == "database.yml"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings(_env_file=None).port == 8080


@pytest.mark.parametrize("value, expected", [
    ("1", True),
    ("true", True),
    ("yes", True),
    ("", False),
    ("0", False),
    ("false", False),
])
def test_is_test_mode_parsing(monkeypatch, value, expected):
    monkeypatch.setenv("IS_TEST_MODE", value)
    assert Settings(_env_file=None).is_test_mode is expected
