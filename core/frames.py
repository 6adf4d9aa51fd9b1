#!/usr/bin/env python3
"""Animation-frame scheduling for the page runtime.

``FrameScheduler.request`` plays the part of ``requestAnimationFrame``: a
callback queued now runs on the next ``run_frame`` call, exactly once.
Callbacks queued while a frame is running land in the following frame.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger("studio.frames")

FrameCallback = Callable[[float], None]

DEFAULT_REFRESH_HZ = 60.0


class FrameScheduler:
    """Queue of callbacks waiting for the next display refresh."""

    def __init__(self) -> None:
        self._callbacks: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._lock = threading.Lock()
        self._frame_count = 0

    def request(self, callback: FrameCallback) -> int:
        with self._lock:
            handle = self._next_handle
            self._next_handle += 1
            self._callbacks[handle] = callback
        return handle

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._callbacks)

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def run_frame(self, timestamp: Optional[float] = None) -> int:
        """Run every callback queued before this frame; return how many ran."""
        if timestamp is None:
            timestamp = time.monotonic() * 1000.0
        with self._lock:
            batch = list(self._callbacks.values())
            self._callbacks.clear()
            self._frame_count += 1
        for callback in batch:
            callback(timestamp)
        return len(batch)


class FrameLoop(threading.Thread):
    """Daemon thread that refreshes a scheduler at a fixed rate."""

    def __init__(self, scheduler: FrameScheduler, refresh_hz: float = DEFAULT_REFRESH_HZ) -> None:
        super().__init__(daemon=True, name="frame_loop")
        if refresh_hz <= 0:
            raise ValueError("refresh_hz must be positive")
        self._scheduler = scheduler
        self._interval = 1.0 / refresh_hz
        self._running = threading.Event()
        self._running.set()

    def run(self) -> None:
        while self._running.is_set():
            try:
                self._scheduler.run_frame()
            except Exception as exc:
                logger.error({"evt": "frame_callback_error", "error": str(exc)})
            time.sleep(self._interval)

    def stop(self) -> None:
        self._running.clear()


__all__ = ["FrameScheduler", "FrameLoop", "FrameCallback", "DEFAULT_REFRESH_HZ"]
