from enum import Enum


class KeyEvent(str, Enum):
    """Keyboard signals the paste coordinator reacts to."""
    PASTE = "paste"
    COPY_OR_CUT = "copy_or_cut"
