from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from ulid import ULID


def _new_item_id() -> str:
	return f"i_{ULID.from_datetime(datetime.now())}"


@dataclass(frozen=True)
class ClipItem:
	"""Immutable queue entry. Identity is the id, never the content."""
	content: str
	item_id: str = field(default_factory=_new_item_id)
	created_at: datetime = field(default_factory=datetime.now, compare=False)

	def preview(self, length: int = 10) -> str:
		return self.content[:length]


class OrderingMode(str, Enum):
	FIFO = "fifo"
	LIFO = "lifo"

	def toggled(self) -> "OrderingMode":
		return OrderingMode.LIFO if self is OrderingMode.FIFO else OrderingMode.FIFO


@dataclass(frozen=True)
class AdvanceOutcome:
	"""Result of consuming the item that was just pasted.

	``removed`` is the consumed item (``None`` when nothing matched),
	``head`` the item now at index 0 and ``matched_head`` tells whether the
	pasted text was the expected next item or was found further down.
	"""
	removed: Optional[ClipItem] = None
	head: Optional[ClipItem] = None
	matched_head: bool = False

	@property
	def republish(self) -> bool:
		return self.removed is not None and self.head is not None


@dataclass(frozen=True)
class QueueSnapshot:
	items: Tuple[ClipItem, ...]
	mode: OrderingMode

	@property
	def head(self) -> Optional[ClipItem]:
		return self.items[0] if self.items else None

	def __len__(self) -> int:
		return len(self.items)
