"""Shared plumbing for page modules: listener registration and frame requests."""

from __future__ import annotations

from typing import Any, Dict, Optional

from core.core import CommandHandler, Core
from core.frames import FrameCallback


class BaseModule:
    """A page behaviour that listens for browser events on a ``Core``.

    Subclasses declare their listeners in ``build_command_map``; a listener
    left out of the map is simply never attached. ``start`` runs once the
    listeners are in place, the equivalent of the script's load-time setup.
    """

    name = "base"

    def __init__(self) -> None:
        self.core: Optional[Core] = None
        self._command_map: Dict[str, CommandHandler] = {}

    # Page load -----------------------------------------------------------
    def attach(self, core: Core) -> None:
        self.core = core
        self._command_map = self.build_command_map() or {}

    def start(self) -> None:  # pragma: no cover - default no-op
        pass

    def stop(self) -> None:  # pragma: no cover - default no-op
        pass

    # Listeners -----------------------------------------------------------
    def register_command(self, name: str, handler: CommandHandler) -> None:
        if name in self._command_map:
            raise ValueError(f"Listener '{name}' already attached in module '{self.name}'")
        self._command_map[name] = handler

    def build_command_map(self) -> Dict[str, CommandHandler]:
        """Browser event name -> handler for the events this module listens to."""
        return {}

    def get_command_map(self) -> Dict[str, CommandHandler]:
        return dict(self._command_map)

    # Runtime services ----------------------------------------------------
    def request_frame(self, callback: FrameCallback) -> int:
        """Queue ``callback`` for the next display refresh of the owning page."""
        if self.core is None:
            raise RuntimeError("Module is not attached to a page")
        return self.core.scheduler.request(callback)

    def publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        # Detached modules (a form driven directly in a test or request) have no audience.
        if self.core is None:
            return
        self.core.broadcast(event_type, payload)
