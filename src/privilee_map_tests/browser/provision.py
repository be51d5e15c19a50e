"""Provision the browser binary Playwright drives."""

from __future__ import annotations

import logging
import subprocess
import sys

from .base import EnvironmentUnavailableError

LOGGER = logging.getLogger(__name__)

_installed: set[str] = set()


def ensure_browser_installed(browser: str = "chromium", *, force: bool = False) -> None:
    """Run ``playwright install`` for ``browser`` once per process."""

    if browser in _installed and not force:
        return
    args = [sys.executable, "-m", "playwright", "install", browser]
    LOGGER.info("Provisioning %s via Playwright", browser)
    try:
        completed = subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise EnvironmentUnavailableError(f"could not run playwright install: {exc}") from exc
    if completed.returncode != 0:
        output = (completed.stderr or completed.stdout or "").strip()
        raise EnvironmentUnavailableError(
            f"playwright install {browser} exited with {completed.returncode}: {output}"
        )
    _installed.add(browser)
