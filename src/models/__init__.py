from models.clipboarditem import AdvanceOutcome, ClipItem, OrderingMode, QueueSnapshot
from models.events import KeyEvent

__all__ = [
    'AdvanceOutcome',
    'ClipItem',
    'KeyEvent',
    'OrderingMode',
    'QueueSnapshot',
]
