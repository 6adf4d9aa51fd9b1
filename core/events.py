#!/usr/bin/env python3
"""Page and upload notifications, fanned out to in-process listeners.

Modules publish status changes (``form_status``) and the server publishes
``photo_uploaded``; each ``/api/events`` client holds one listener queue.
"""

from __future__ import annotations

import queue
import threading
import time
from typing import Any, Dict

MAX_BACKLOG = 256


class EventBus:
    """Bounded per-listener queues; a full queue drops the newest message."""

    def __init__(self, maxsize: int = MAX_BACKLOG) -> None:
        self._subscribers: set[queue.Queue] = set()
        self._guard = threading.Lock()
        self._maxsize = maxsize

    def listen(self) -> queue.Queue:
        """Open a listener queue; pair with ``remove`` when the client leaves."""
        inbox: queue.Queue = queue.Queue(maxsize=self._maxsize)
        with self._guard:
            self._subscribers.add(inbox)
        return inbox

    def remove(self, inbox: queue.Queue) -> None:
        with self._guard:
            self._subscribers.discard(inbox)

    @property
    def listener_count(self) -> int:
        with self._guard:
            return len(self._subscribers)

    def publish(self, event_type: str, payload: Dict[str, Any]) -> int:
        """Deliver to every listener; return how many accepted the message."""
        message = {"type": event_type, "payload": payload, "ts": time.time()}
        with self._guard:
            subscribers = tuple(self._subscribers)
        delivered = 0
        for inbox in subscribers:
            try:
                inbox.put_nowait(message)
            except queue.Full:
                # A stalled event-stream client never holds up an upload.
                continue
            delivered += 1
        return delivered


event_bus = EventBus()
