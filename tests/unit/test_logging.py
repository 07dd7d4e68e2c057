"""Logging setup tests."""

import logging

import pytest

from officeauth.shared.logging import QUIET_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    names = ("officeauth", *QUIET_LOGGERS)
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_debug_opens_service_and_library_loggers() -> None:
    setup_logging(debug=True)
    assert logging.getLogger("officeauth").level == logging.DEBUG
    assert logging.getLogger("officeauth.core.lifespan").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("sqlalchemy.engine").level == logging.DEBUG


def test_default_level_is_info_with_quiet_libraries() -> None:
    setup_logging(debug=False)
    service = logging.getLogger("officeauth.application.services.token_lifecycle")
    assert service.isEnabledFor(logging.INFO)
    assert not service.isEnabledFor(logging.DEBUG)
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_level_follows_settings_when_not_given(monkeypatch) -> None:
    monkeypatch.setattr(
        "officeauth.shared.logging.get_settings",
        lambda: type("S", (), {"debug": True})(),
    )
    setup_logging()
    assert logging.getLogger("officeauth").level == logging.DEBUG
