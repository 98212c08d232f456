"""Tests for copy feedback around the clipboard boundary.

Updates:
  v0.1.0 - 2026-10-02 - Cover copied flag reset and failure alerts.
"""

from __future__ import annotations

import asyncio

import pytest

from core.clipboard import COPY_FAILED_MESSAGE, CopyFeedback
from core.exceptions import ClipboardError


class _RecordingWriter:
    def __init__(self) -> None:
        self.texts: list[str] = []

    def set_text(self, text: str) -> None:
        self.texts.append(text)


class _FailingWriter:
    def set_text(self, text: str) -> None:
        raise ClipboardError("clipboard locked")


@pytest.mark.asyncio()
async def test_copy_sets_flag_then_resets() -> None:
    """Set the copied flag on success and clear it after the window."""
    writer = _RecordingWriter()
    feedback = CopyFeedback(writer, reset_after=0.01)

    assert await feedback.copy("Say Thanks") is True
    assert writer.texts == ["Say Thanks"]
    assert feedback.copied is True

    await asyncio.sleep(0.05)
    assert feedback.copied is False


@pytest.mark.asyncio()
async def test_repeated_copy_restarts_window() -> None:
    """A second copy keeps the flag set for a fresh window."""
    feedback = CopyFeedback(_RecordingWriter(), reset_after=0.2)

    await feedback.copy("first")
    await asyncio.sleep(0.12)
    await feedback.copy("second")
    await asyncio.sleep(0.12)

    assert feedback.copied is True
    await asyncio.sleep(0.2)
    assert feedback.copied is False


@pytest.mark.asyncio()
async def test_copy_failure_alerts_and_leaves_flag_clear() -> None:
    """Raise a blocking alert and report failure when the write is rejected."""
    alerts: list[str] = []
    feedback = CopyFeedback(_FailingWriter(), alert=alerts.append)

    assert await feedback.copy("anything") is False
    assert alerts == [COPY_FAILED_MESSAGE]
    assert feedback.copied is False
