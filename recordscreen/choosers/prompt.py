#!/usr/bin/env python3
"""Plain numbered-menu picker for terminals without fzf."""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, TextIO

from recordscreen.choosers.base import Chooser, register_chooser


@register_chooser
class PromptChooser(Chooser):
    name = "prompt"
    display_name = "numbered menu"
    install_hint = "built in"
    priority = 50

    def __init__(
        self,
        read: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
    ) -> None:
        self.read = read
        self.out = out

    def choose(self, labels: Sequence[str], prompt: str) -> Optional[int]:
        if not labels:
            return None

        out = self.out or sys.stderr
        for i, label in enumerate(labels, 1):
            print(f"  {i}) {label}", file=out)

        # stdout is reserved for command output
        print(prompt, end="", file=out, flush=True)
        try:
            answer = self.read("").strip()
        except (EOFError, KeyboardInterrupt):
            print(file=out)
            return None

        if not answer:
            return None
        try:
            number = int(answer)
        except ValueError:
            return None
        if 1 <= number <= len(labels):
            return number - 1
        return None

    @classmethod
    def is_available(cls) -> bool:
        return True
