from __future__ import annotations

import logging

import pytest

from batchexec.core.config import BatchSettings, get_settings


SETTINGS_ENV_VARS = [
    "BATCH_ECHO", "BATCH__ECHO",
    "BATCH_FATAL", "BATCH__FATAL",
    "BATCH_PREFIX", "BATCH__PREFIX",
    "BATCH_RETRY", "BATCH__RETRY",
    "BATCH_TIMEOUT", "BATCH__TIMEOUT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from the caller's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> BatchSettings:
    """Default settings with a fixed prefix, independent of argv[0]."""
    return BatchSettings(BATCH_PREFIX="batch-test")


@pytest.fixture
def fake_runner():
    """
    Provide FakeCommandRunner for tests.

    Example:
        def test_retry(fake_runner):
            fake_runner.queue_results(exit_codes=[1, 0])
            bx = BatchExec(runner=fake_runner, retry=2)
            assert bx.execute("flaky") == 0
    """
    from tests.fakes.command_runner import FakeCommandRunner
    return FakeCommandRunner()


@pytest.fixture
def exec_logger(caplog) -> logging.Logger:
    """Logger injected into BatchExec, captured at DEBUG level."""
    caplog.set_level(logging.DEBUG, logger="batchexec.test")
    return logging.getLogger("batchexec.test")


@pytest.fixture
def make_exec(fake_runner, exec_logger, settings):
    """Factory for BatchExec wired to the fake runner and test logger."""
    from batchexec import BatchExec

    def _make(*pairs, **overrides):
        return BatchExec(
            *pairs,
            logger=exec_logger,
            runner=fake_runner,
            settings=settings,
            **overrides,
        )

    return _make
