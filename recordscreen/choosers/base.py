#!/usr/bin/env python3
"""Abstract base class and registry for interactive choosers.

A chooser shows an ordered list of labels with a prompt and returns the
index the user picked, or None when the user declined (ESC, Ctrl-C, empty
answer). Choosers never see single-option lists: the selection engine
auto-picks those without prompting.

Adding a New Chooser:
    1. Create a new file in recordscreen/choosers/ (e.g., rofi.py)
    2. Subclass Chooser and implement choose() and is_available()
    3. Use the @register_chooser decorator on your class
    4. Import the module in recordscreen/choosers/__init__.py

Example:
    ```python
    from recordscreen.choosers.base import Chooser, register_chooser

    @register_chooser
    class RofiChooser(Chooser):
        name = "rofi"
        display_name = "rofi -dmenu"
        install_hint = "apt install rofi"

        def choose(self, labels, prompt):
            ...

        @classmethod
        def is_available(cls) -> bool:
            return shutil.which("rofi") is not None
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Type

# ============================================================================
# CHOOSER REGISTRY
# ============================================================================

# Global registry mapping chooser name -> chooser class (not instance).
_REGISTRY: Dict[str, Type["Chooser"]] = {}


def register_chooser(cls: Type["Chooser"]) -> Type["Chooser"]:
    """Decorator to register a Chooser class in the global registry.

    Args:
        cls: The Chooser subclass to register.

    Returns:
        The same class, unmodified.
    """
    _REGISTRY[cls.name] = cls
    return cls


def get_registry() -> Dict[str, Type["Chooser"]]:
    """Get a copy of the chooser registry."""
    return _REGISTRY.copy()


# ============================================================================
# ABSTRACT BASE CLASS
# ============================================================================


class Chooser(ABC):
    """Abstract base class for interactive pickers.

    Class Attributes:
        name: Registry key (e.g., "fzf")
        display_name: Human-readable name
        install_hint: How to install the backing tool
        priority: Lower is preferred when auto-selecting a chooser
    """

    name: str = ""
    display_name: str = ""
    install_hint: str = ""
    priority: int = 100

    @abstractmethod
    def choose(self, labels: Sequence[str], prompt: str) -> Optional[int]:
        """Ask the user to pick one of ``labels``.

        Args:
            labels: Option labels in display order.
            prompt: Short prompt text (e.g., "Screen> ").

        Returns:
            Index into ``labels``, or None if the user declined.
        """

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Whether this chooser can run in the current environment."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
