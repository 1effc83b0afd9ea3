"""State shared by the watcher, the paste coordinator and any front end."""

import logging
import threading
from typing import Optional

from clipboard.base import ClipboardPort
from models import ClipItem, OrderingMode
from services.queue_engine import QueueEngine

logger = logging.getLogger(__name__)


class SyncContext:
    """Owns the queue, the clipboard baseline and the enabled flag.

    ``lock`` serialises every handler that touches this state. Every write
    to the clipboard goes through ``publish`` so the baseline always moves
    past our own writes before the next poll.
    """

    def __init__(self, port: ClipboardPort, engine: Optional[QueueEngine] = None) -> None:
        self.port = port
        self.engine = engine if engine is not None else QueueEngine()
        self.lock = threading.RLock()
        self.baseline = port.current_generation()
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        with self.lock:
            if enabled == self._enabled:
                return
            self._enabled = enabled
            if enabled:
                # whatever was copied while paused is ignored
                self.baseline = self.port.current_generation()
        logger.info("Clipboard queue %s", "enabled" if enabled else "paused")

    def toggle_enabled(self) -> bool:
        with self.lock:
            self.set_enabled(not self._enabled)
            return self._enabled

    def publish(self, item: ClipItem) -> bool:
        with self.lock:
            written = self.port.write_text(item.content)
            self.baseline = self.port.current_generation()
        if not written:
            logger.warning("Could not load item %s into the clipboard", item.item_id)
        return written

    def publish_head(self) -> bool:
        with self.lock:
            head = self.engine.head
            if head is None:
                return False
            return self.publish(head)

    # ------------------------------------------------------------------
    # Front-end operations
    # ------------------------------------------------------------------
    def copy_item(self, item_id: str) -> bool:
        """Put a specific queued item on the clipboard right away."""
        with self.lock:
            item = self.engine.get(item_id)
            if item is None:
                return False
            return self.publish(item)

    def set_ordering_mode(self, mode: OrderingMode) -> bool:
        with self.lock:
            changed = self.engine.set_ordering_mode(mode)
            if changed:
                self.publish_head()
            return changed

    def toggle_ordering_mode(self) -> OrderingMode:
        with self.lock:
            self.set_ordering_mode(self.engine.mode.toggled())
            return self.engine.mode

    def remove(self, item_id: str) -> Optional[ClipItem]:
        with self.lock:
            return self.engine.remove(item_id)

    def remove_all(self) -> int:
        with self.lock:
            return self.engine.remove_all()

    def duplicate(self, after_item_id: str) -> Optional[ClipItem]:
        with self.lock:
            return self.engine.duplicate(after_item_id)

    def reorder(self, from_index: int, to_index: int) -> bool:
        with self.lock:
            return self.engine.reorder(from_index, to_index)
