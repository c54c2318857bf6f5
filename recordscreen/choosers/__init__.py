#!/usr/bin/env python3
"""Chooser registry and factory functions.

Usage:
    chooser = default_chooser()          # fzf if installed, else numbered menu
    chooser = get_chooser("prompt")
    index = chooser.choose(["High", "Medium", "Low"], "Quality> ")
"""

from __future__ import annotations

from typing import Any, List, Optional

from recordscreen.choosers.base import Chooser, get_registry

# Importing the modules registers their choosers
from recordscreen.choosers import fzf  # noqa: F401
from recordscreen.choosers import prompt  # noqa: F401

__all__ = [
    "Chooser",
    "get_chooser",
    "available_choosers",
    "default_chooser",
]


def get_chooser(name: str, **kwargs: Any) -> Chooser:
    """Instantiate a chooser by registry name.

    Raises:
        KeyError: If the name is not registered.
    """
    registry = get_registry()
    if name not in registry:
        raise KeyError(
            f"Unknown chooser: '{name}'. "
            f"Available choosers: {', '.join(sorted(registry))}"
        )
    return registry[name](**kwargs)


def available_choosers() -> List[str]:
    """Names of usable choosers, most preferred first."""
    registry = get_registry()
    usable = [cls for cls in registry.values() if cls.is_available()]
    return [cls.name for cls in sorted(usable, key=lambda c: c.priority)]


def default_chooser(preferred: Optional[str] = None) -> Chooser:
    """Pick the chooser to use for this session.

    Args:
        preferred: Registry name requested by configuration, if any.

    Raises:
        KeyError: If ``preferred`` is not registered.
        RuntimeError: If ``preferred`` is registered but unavailable, or
            nothing at all is available.
    """
    if preferred:
        chooser = get_chooser(preferred)
        if not type(chooser).is_available():
            raise RuntimeError(
                f"Chooser '{preferred}' is not available ({type(chooser).install_hint})"
            )
        return chooser

    names = available_choosers()
    if not names:
        raise RuntimeError("No interactive chooser available")
    return get_chooser(names[0])
