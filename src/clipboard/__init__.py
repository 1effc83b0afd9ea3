from clipboard.base import ClipboardPort
from clipboard.factory import BACKENDS, get_clipboard_class, get_clipboard_port
from clipboard.memory import MemoryClipboard

__all__ = [
    'BACKENDS',
    'ClipboardPort',
    'MemoryClipboard',
    'get_clipboard_class',
    'get_clipboard_port',
]
