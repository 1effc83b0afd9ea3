"""Ordered queue of captured clipboard text.

Index 0 is always the next item to paste. In FIFO mode new captures are
appended and the oldest un-pasted item sits at the front; in LIFO mode new
captures are pushed to the front.
"""

import logging
import threading
from typing import Callable, List, Optional

from models import AdvanceOutcome, ClipItem, OrderingMode, QueueSnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[QueueSnapshot], None]


class QueueEngine:

    def __init__(self, mode: OrderingMode = OrderingMode.FIFO) -> None:
        self._items: List[ClipItem] = []
        self._mode = OrderingMode(mode)
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def mode(self) -> OrderingMode:
        return self._mode

    @property
    def head(self) -> Optional[ClipItem]:
        with self._lock:
            return self._items[0] if self._items else None

    @property
    def boundary(self) -> Optional[ClipItem]:
        """Item a new capture is compared against: tail in FIFO, head in LIFO."""
        with self._lock:
            if not self._items:
                return None
            return self._items[-1] if self._mode is OrderingMode.FIFO else self._items[0]

    def snapshot(self) -> QueueSnapshot:
        with self._lock:
            return QueueSnapshot(items=tuple(self._items), mode=self._mode)

    def contents(self) -> List[str]:
        with self._lock:
            return [item.content for item in self._items]

    def index_of(self, item_id: str) -> Optional[int]:
        with self._lock:
            for index, item in enumerate(self._items):
                if item.item_id == item_id:
                    return index
            return None

    def get(self, item_id: str) -> Optional[ClipItem]:
        with self._lock:
            index = self.index_of(item_id)
            return None if index is None else self._items[index]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Queue listener %r failed", listener)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def is_duplicate(self, content: str) -> bool:
        boundary = self.boundary
        return boundary is not None and boundary.content == content

    def insert(self, content: str) -> Optional[ClipItem]:
        """Capture ``content`` unless it repeats the boundary item."""
        with self._lock:
            if self.is_duplicate(content):
                logger.debug("Skipping duplicate capture %r", content[:10])
                return None

            item = ClipItem(content=content)
            if self._mode is OrderingMode.FIFO:
                self._items.append(item)
            else:
                self._items.insert(0, item)
            count = len(self._items)

        logger.info("Captured item %s (%d queued)", item.item_id, count)
        self._notify()
        return item

    def advance(self, observed_content: str) -> AdvanceOutcome:
        """Consume the item whose content was just pasted.

        The head is expected; any other item with the same content is taken
        instead when the paste raced a refill. Unknown text is ignored.
        """
        with self._lock:
            if not self._items:
                return AdvanceOutcome()

            if self._items[0].content == observed_content:
                removed = self._items.pop(0)
                matched_head = True
            else:
                index = next(
                    (i for i, item in enumerate(self._items) if item.content == observed_content),
                    None,
                )
                if index is None:
                    logger.debug("Pasted text matches nothing queued")
                    return AdvanceOutcome(head=self._items[0])
                removed = self._items.pop(index)
                matched_head = False
            head = self._items[0] if self._items else None

        self._notify()
        return AdvanceOutcome(removed=removed, head=head, matched_head=matched_head)

    def remove(self, item_id: str) -> Optional[ClipItem]:
        with self._lock:
            index = self.index_of(item_id)
            if index is None:
                return None
            removed = self._items.pop(index)
        self._notify()
        return removed

    def remove_all(self) -> int:
        with self._lock:
            count = len(self._items)
            self._items.clear()
        if count:
            self._notify()
        return count

    def duplicate(self, after_item_id: str) -> Optional[ClipItem]:
        """Insert a copy of an item directly after it, with a fresh id."""
        with self._lock:
            index = self.index_of(after_item_id)
            if index is None:
                return None
            copy = ClipItem(content=self._items[index].content)
            self._items.insert(index + 1, copy)
        self._notify()
        return copy

    def reorder(self, from_index: int, to_index: int) -> bool:
        """Move one item so that it ends up at ``to_index``.

        ``to_index`` is the final position of the moved item, not a drop
        offset measured before removal: ``reorder(0, 2)`` on ``[A, B, C]``
        gives ``[B, C, A]``. Front ends reporting list-move offsets must
        subtract one when moving an item downwards.
        """
        with self._lock:
            size = len(self._items)
            if not 0 <= from_index < size:
                return False
            to_index = min(max(to_index, 0), size - 1)
            if from_index == to_index:
                return False
            item = self._items.pop(from_index)
            self._items.insert(to_index, item)
        self._notify()
        return True

    def set_ordering_mode(self, mode: OrderingMode) -> bool:
        """Switch discipline, reversing the queue when the mode changes.

        Returns ``True`` when the mode changed, in which case the head must
        be written to the clipboard again.
        """
        mode = OrderingMode(mode)
        with self._lock:
            if mode is self._mode:
                return False
            self._mode = mode
            self._items.reverse()

        logger.info("Ordering mode is now %s", mode.value.upper())
        self._notify()
        return True
