"""Pytest configuration for test isolation.

Settings are read from ``CHATTER_EARNINGS_*`` environment variables (and a
local ``.env`` when the CLI runs). A developer shell or ``.env`` that sets
any of them would change parsing results, so every test starts from a clean
environment and its own working directory.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop ``CHATTER_EARNINGS_*`` variables and run from a temp directory."""

    for name in list(os.environ):
        if name.startswith("CHATTER_EARNINGS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo console logging a CLI test configured against its captured stderr."""

    yield
    logger = logging.getLogger("chatter_earnings")
    for h in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def ledger_text() -> str:
    return "\n".join(
        [
            "Oct 8, 2025 11:54 am $14.99 $3.00 $11.99 Recurring subscription from BootyLover",
            "Oct 8, 2025 11:27 am $50.01 $10.00 $40.01 Payment for message from Fuunyan",
            "Oct 8, 2025 1:05 pm $25.00 $5.00 $20.00 Payment for message from Kai",
            "Oct 8, 2025 1:40 pm $10.00 $2.00 $8.00 Tip from Jane",
            "Oct 8, 2025 9:15 pm $15.00 $3.00 $12.00 Message from Sam",
            "",
            "Oct 8, 2025 9:20 pm $7.50 $1.50 $6.00 Something else entirely",
        ]
    )
