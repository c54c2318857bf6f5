"""Runtime configuration read from RECORDSCREEN_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from recordscreen.types import DEFAULT_DISPLAY, DEFAULT_OUTPUT_DIR


def env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass(frozen=True)
class RecorderConfig:
    output_dir: Path
    display: str
    chooser: Optional[str]
    ffmpeg: str
    verbose: bool


def load_config(environ: Optional[Mapping[str, str]] = None) -> RecorderConfig:
    """Build a RecorderConfig from the environment (os.environ by default)."""
    if environ is None:
        environ = os.environ

    output_dir = Path(env_str(environ, "RECORDSCREEN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)).expanduser()
    display = env_str(
        environ, "RECORDSCREEN_DISPLAY", env_str(environ, "DISPLAY", DEFAULT_DISPLAY)
    )
    chooser = env_str(environ, "RECORDSCREEN_CHOOSER", "").lower() or None
    if chooser == "auto":
        chooser = None

    return RecorderConfig(
        output_dir=output_dir,
        display=display,
        chooser=chooser,
        ffmpeg=env_str(environ, "RECORDSCREEN_FFMPEG", "ffmpeg"),
        verbose=env_bool(environ, "RECORDSCREEN_VERBOSE", False),
    )
