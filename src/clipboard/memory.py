import threading
from typing import List, Optional

from clipboard.base import ClipboardPort


class MemoryClipboard(ClipboardPort):
    """In-process clipboard used for headless runs and tests.

    ``copy`` and ``copy_non_text`` stand in for other applications writing
    to the clipboard; ``writes`` records what went through ``write_text``.
    """

    def __init__(self, text: Optional[str] = None) -> None:
        self._lock = threading.Lock()
        self._text = text
        self._generation = 0
        self.writes: List[str] = []

    def read_text(self) -> Optional[str]:
        with self._lock:
            return self._text

    def write_text(self, text: str) -> bool:
        with self._lock:
            self._text = text
            self._generation += 1
            self.writes.append(text)
        return True

    def current_generation(self) -> int:
        with self._lock:
            return self._generation

    def copy(self, text: str) -> None:
        with self._lock:
            self._text = text
            self._generation += 1

    def copy_non_text(self) -> None:
        with self._lock:
            self._text = None
            self._generation += 1
