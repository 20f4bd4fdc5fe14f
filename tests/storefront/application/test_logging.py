import logging

import pytest
from storefront.utils.logging import get_log_level, setup_stdlib_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "ENV", "ENVIRONMENT", "PROTEAN_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    ("environment", "expected"),
    [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("other", "INFO")],
)
def test_level_follows_environment(monkeypatch, environment, expected):
    monkeypatch.setenv("ENVIRONMENT", environment)
    assert get_log_level() == expected


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert get_log_level() == "DEBUG"


def test_file_handlers_only_with_log_dir(tmp_path, restore_root_logger):
    setup_stdlib_logging()
    assert len(logging.getLogger().handlers) == 1

    setup_stdlib_logging(log_dir=str(tmp_path / "logs"))
    assert len(logging.getLogger().handlers) == 3
    assert (tmp_path / "logs").is_dir()
