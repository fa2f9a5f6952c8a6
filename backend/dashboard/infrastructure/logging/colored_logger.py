"""Colored sync logger — ANSI-colored console logging for roster synchronisation.

Provides a SyncLogger with color-coded output per sync stage, so fetches,
write-throughs and change-feed traffic can be told apart in the terminal.

Color scheme:
    🔵 Blue    — Fetch
    🟢 Green   — Mutation (write-through)
    🟣 Magenta — Change feed
    🟡 Yellow  — Rollover
    🔴 Red     — Errors
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Sync Stage Definitions ───────────────────────────────────────────

class SyncStage:
    """Predefined sync stages with colors and icons."""

    FETCH = ("FETCH", _Colors.BLUE, "📥")
    MUTATION = ("MUTATION", _Colors.GREEN, "✏️")
    FEED = ("FEED", _Colors.MAGENTA, "📡")
    ROLLOVER = ("ROLLOVER", _Colors.YELLOW, "🔁")


# ── SyncLogger ───────────────────────────────────────────────────────

class SyncLogger:
    """Color-coded logger for roster managers.

    Usage:
        log = SyncLogger("ClientRosterManager")
        with log.timed_step(SyncStage.FETCH, "Loading clientes", periodo="2025-03"):
            rows = await repository.get_by_period(period)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + self._details(kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed sync step in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        """Log additional detail at debug level (gray/dimmed)."""
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.debug(formatted + self._details(kwargs))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed time.

        Exceptions are logged and re-raised.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.2f}s", **kwargs)

    @staticmethod
    def _details(kwargs: dict[str, Any]) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"
