import pytest
from pydantic import ValidationError

from tabular_records.core.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ENV",
        "LOG_LEVEL",
        "TABLE_RENDER_MAX_ITEMS",
        "TABLE_RENDER_MAX_STRING",
        "TABLE_STRICT_SHAPE_CHECKS",
        "TABLE_CONFIGURE_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings(_env_file=None)
    assert s.env == "development"
    assert s.log_level == "INFO"
    assert s.render_max_items == 50
    assert s.render_max_string == 4096
    assert s.configure_logging is False


def test_shape_checks_follow_environment():
    assert Settings(_env_file=None, ENV="test").strict_shape_checks is True
    assert Settings(_env_file=None, ENV="local").strict_shape_checks is True
    assert Settings(_env_file=None, ENV="production").strict_shape_checks is False


def test_explicit_shape_checks_override_environment(monkeypatch):
    monkeypatch.setenv("ENV", "production")
    monkeypatch.setenv("TABLE_STRICT_SHAPE_CHECKS", "true")
    assert Settings(_env_file=None).strict_shape_checks is True


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("TABLE_RENDER_MAX_ITEMS", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings(_env_file=None)
    assert s.render_max_items == 5
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("TABLE_RENDER_MAX_ITEMS", "0"),
        ("TABLE_RENDER_MAX_STRING", "3"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_invalid_values_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
