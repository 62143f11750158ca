from __future__ import annotations

import logging

import pytest


@pytest.fixture(name="faker_locale")
def faker_locale_fixture() -> list[str]:
    return ["en_US"]


@pytest.fixture(name="debug_logs")
def debug_logs_fixture(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger="blueprint")
    return caplog
