from __future__ import annotations

import sys
from collections.abc import Iterator

import pytest
from loguru import logger

from tabwin.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _restore_logger() -> Iterator[None]:
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_configure_logging_verbose_emits_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)
    logger.debug("hello debug")
    assert "hello debug" in capsys.readouterr().err


def test_configure_logging_default_hides_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()
    logger.debug("hidden debug")
    logger.info("shown info")
    err = capsys.readouterr().err
    assert "hidden debug" not in err
    assert "shown info" in err


def test_configure_logging_env_level_overrides(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TABWIN_LOG_LEVEL", "error")
    configure_logging(verbose=True)
    logger.warning("quiet warning")
    logger.error("loud error")
    err = capsys.readouterr().err
    assert "quiet warning" not in err
    assert "loud error" in err
