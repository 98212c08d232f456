"""Clipboard boundary for copying prompt text.

Copying is the only operation whose failure reaches the user: a failed copy
raises a blocking alert, while a successful copy sets a transient ``copied``
flag that clears itself after a short display window.

Updates:
  v0.1.1 - 2026-10-06 - Create the Qt application lazily for headless CLI copies.
  v0.1.0 - 2026-10-02 - Introduce clipboard writer protocol and copy feedback state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import ClipboardError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("prompt_vault.clipboard")

DEFAULT_COPY_FEEDBACK_SECONDS = 1.2
COPY_FAILED_MESSAGE = "Could not copy the prompt to the clipboard."

__all__ = [
    "COPY_FAILED_MESSAGE",
    "DEFAULT_COPY_FEEDBACK_SECONDS",
    "ClipboardWriter",
    "CopyFeedback",
    "QtClipboardWriter",
]


class ClipboardWriter(Protocol):
    """Minimal clipboard surface consumed by :class:`CopyFeedback`."""

    def set_text(self, text: str) -> None:
        """Place *text* on the clipboard, raising :class:`ClipboardError` on failure."""
        ...


class QtClipboardWriter:
    """Write to the system clipboard through ``QGuiApplication``."""

    def __init__(self) -> None:
        self._app: Any = None

    def _clipboard(self) -> Any:
        try:
            from PySide6.QtGui import QGuiApplication
        except ImportError as exc:  # pragma: no cover - depends on the runtime environment
            raise ClipboardError("PySide6 is required for clipboard access") from exc
        app = QGuiApplication.instance()
        if app is None:
            app = QGuiApplication([])
            self._app = app
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:  # pragma: no cover - platform plugin without clipboard
            raise ClipboardError("System clipboard is unavailable")
        return clipboard

    def set_text(self, text: str) -> None:
        try:
            clipboard = self._clipboard()
            clipboard.setText(text)
        except ClipboardError:
            raise
        except Exception as exc:  # pragma: no cover - Qt platform failures
            raise ClipboardError(str(exc)) from exc


def _log_alert(message: str) -> None:
    logger.error(message)


class CopyFeedback:
    """Copy text and expose a ``copied`` flag for a fixed display window."""

    def __init__(
        self,
        writer: ClipboardWriter,
        *,
        alert: Callable[[str], None] | None = None,
        reset_after: float = DEFAULT_COPY_FEEDBACK_SECONDS,
    ) -> None:
        self._writer = writer
        self._alert = alert or _log_alert
        self._reset_after = reset_after
        self._reset_handle: asyncio.TimerHandle | None = None
        self.copied = False

    @property
    def reset_after(self) -> float:
        return self._reset_after

    def _reset(self) -> None:
        self.copied = False
        self._reset_handle = None

    async def copy(self, text: str) -> bool:
        """Copy *text*; return ``True`` on success, alert and return ``False`` otherwise."""
        try:
            self._writer.set_text(text)
        except ClipboardError as exc:
            logger.warning("Clipboard write failed: %s", exc)
            self._alert(COPY_FAILED_MESSAGE)
            return False
        self.copied = True
        loop = asyncio.get_running_loop()
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        self._reset_handle = loop.call_later(self._reset_after, self._reset)
        return True
