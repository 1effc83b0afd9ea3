import logging
import platform
from typing import Callable, List, Optional, Sequence

import keyboard

from models import KeyEvent

logger = logging.getLogger(__name__)


def default_hotkeys(system: Optional[str] = None) -> dict:
    """Key combinations that count as paste and as copy/cut on this platform."""
    system = system or platform.system()
    if system == "Darwin":
        return {
            KeyEvent.PASTE: ("command+v",),
            KeyEvent.COPY_OR_CUT: ("command+c", "command+x"),
        }
    return {
        KeyEvent.PASTE: ("ctrl+v", "shift+insert"),
        KeyEvent.COPY_OR_CUT: ("ctrl+c", "ctrl+x", "ctrl+insert"),
    }


class KeyboardListener:
    """Global keyboard hooks feeding paste/copy signals to a sink.

    Keys are observed, never suppressed. Hook registration can fail (no
    root on Linux, no accessibility permission on macOS); the failure is
    logged and the queue keeps working from clipboard polling alone.
    """

    def __init__(
        self,
        on_event: Callable[[KeyEvent], None],
        on_toggle: Optional[Callable[[], object]] = None,
        toggle_hotkey: Optional[str] = None,
        hotkeys: Optional[dict] = None,
    ) -> None:
        self._on_event = on_event
        self._on_toggle = on_toggle
        self.toggle_hotkey = toggle_hotkey or None
        self.hotkeys = hotkeys or default_hotkeys()
        self._handles: List[object] = []

    @property
    def is_running(self) -> bool:
        return bool(self._handles)

    def start(self) -> bool:
        if self._handles:
            return True

        try:
            for event, combos in self.hotkeys.items():
                self._register(combos, self._emitter(event))
            if self.toggle_hotkey and self._on_toggle is not None:
                self._register((self.toggle_hotkey,), self._on_toggle)
        except Exception as exc:
            logger.warning(
                "Keyboard hooks unavailable, paste tracking disabled: %s", exc)
            self.stop()
            return False

        logger.info("Keyboard hooks registered (%d combinations)", len(self._handles))
        return True

    def stop(self) -> None:
        for handle in self._handles:
            try:
                keyboard.remove_hotkey(handle)
            except (KeyError, ValueError):
                pass
        self._handles = []

    def _register(self, combos: Sequence[str], callback: Callable[[], object]) -> None:
        for combo in combos:
            self._handles.append(keyboard.add_hotkey(combo, callback, suppress=False))

    def _emitter(self, event: KeyEvent) -> Callable[[], None]:
        def emit() -> None:
            try:
                self._on_event(event)
            except Exception:
                logger.exception("Error while handling %s", event.value)
        return emit
