"""Opt-in timing hooks for the analysis loop."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

DEBUG_DTMFDETECT = os.getenv("DTMFDETECT_DEBUG", "").lower() in {"1", "true", "yes", "on"}

logger = logging.getLogger(__name__)


def debug_enabled() -> bool:
    """Return True when lightweight instrumentation should run."""
    return DEBUG_DTMFDETECT


@contextmanager
def time_block(
    label: str,
    *,
    audio_s: Optional[float] = None,
    emitter: Callable[[str], None] | None = None,
) -> Iterator[None]:
    """
    Report how long the wrapped code took when ``DTMFDETECT_DEBUG`` is set.

    With ``audio_s`` (the length of audio the code processed) the message
    also carries the real-time factor, so values well below 1.0 mean the
    detector keeps up with a live capture. Messages go to ``emitter`` or,
    by default, to this module's logger at DEBUG level.
    """
    if not DEBUG_DTMFDETECT:
        yield
        return

    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_s = time.perf_counter() - started
        message = f"{label} took {elapsed_s * 1000.0:.3f} ms"
        if audio_s:
            message += f" for {audio_s * 1000.0:.1f} ms of audio ({elapsed_s / audio_s:.3f}x realtime)"
        (emitter or logger.debug)(message)
