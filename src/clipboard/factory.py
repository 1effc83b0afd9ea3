import platform
from typing import Optional, Type

from clipboard.base import ClipboardPort

BACKENDS = ("auto", "memory", "windows", "macos", "linux")


def get_clipboard_class(backend: Optional[str] = None) -> Type[ClipboardPort]:
    backend = (backend or "auto").lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown clipboard backend {backend!r}")

    if backend == "memory":
        from clipboard.memory import MemoryClipboard
        return MemoryClipboard

    if backend == "auto":
        system = platform.system()
        backend = {"Windows": "windows", "Linux": "linux", "Darwin": "macos"}.get(system, "")
        if not backend:
            raise NotImplementedError(f"Platform '{system}' is not supported")

    if backend == "windows":
        from clipboard.windows import WindowsClipboard
        return WindowsClipboard
    elif backend == "linux":
        from clipboard.linux import LinuxClipboard
        return LinuxClipboard
    else:
        from clipboard.macos import MacOSClipboard
        return MacOSClipboard


def get_clipboard_port(backend: Optional[str] = None) -> ClipboardPort:
    clipboard_class = get_clipboard_class(backend)
    return clipboard_class()
