"""ClipQueue settings, loaded from ``.env``/environment and validated with Pydantic."""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from clipboard.factory import BACKENDS
from models import OrderingMode

ENV_PREFIX = "CLIPQUEUE_"


def _to_bool(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ClipQueueSettings(BaseModel):
    poll_interval: float = Field(
        default=0.1,
        gt=0,
        le=5.0,
        description="Seconds between clipboard generation checks"
    )
    debounce_delay: float = Field(
        default=0.6,
        ge=0,
        description="Quiet period after the last capture before the next item is loaded"
    )
    paste_delay: float = Field(
        default=0.05,
        ge=0,
        description="Wait after a paste keystroke before reading the clipboard"
    )
    copy_check_delays: Tuple[float, ...] = Field(
        default=(0.0, 0.1, 0.3),
        description="Delays at which the clipboard is re-checked after copy/cut"
    )
    ordering_mode: OrderingMode = OrderingMode.FIFO
    keyboard_enabled: bool = True
    toggle_hotkey: str = "ctrl+alt+c"
    backend: str = "auto"
    log_level: str = "INFO"

    @field_validator("copy_check_delays", mode="before")
    @classmethod
    def parse_delays(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(float(part) for part in v.split(",") if part.strip())
        return v

    @field_validator("copy_check_delays")
    @classmethod
    def validate_delays(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        if not v:
            raise ValueError("copy_check_delays needs at least one delay")
        if any(delay < 0 for delay in v):
            raise ValueError("copy_check_delays cannot be negative")
        return tuple(sorted(v))

    @field_validator("ordering_mode", mode="before")
    @classmethod
    def normalise_mode(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(BACKENDS)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError("log_level must be DEBUG, INFO, WARNING or ERROR")
        return v

    @classmethod
    def from_env(cls, *, env_path: Optional[Path] = None, **overrides: Any) -> "ClipQueueSettings":
        """Build settings from ``CLIPQUEUE_*`` variables, then apply overrides.

        Variables already present in the environment win over the ``.env`` file.
        """
        load_dotenv(dotenv_path=env_path or find_dotenv(usecwd=True), override=False)

        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            if name == "keyboard_enabled":
                values[name] = _to_bool(raw)
            else:
                values[name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
