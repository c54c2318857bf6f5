#!/usr/bin/env python3
"""fzf-backed fuzzy picker.

Each option is fed to fzf as ``<index>\\t<label>``; only the label column is
displayed and searched, and the index is read back from the selected line.
fzf exits 1 on no match and 130 on ESC/Ctrl-C, both treated as "declined".
"""

from __future__ import annotations

import shutil
import subprocess
from typing import List, Optional, Sequence

from recordscreen.choosers.base import Chooser, register_chooser


@register_chooser
class FzfChooser(Chooser):
    name = "fzf"
    display_name = "fzf fuzzy finder"
    install_hint = "apt install fzf"
    priority = 10

    def __init__(self, executable: str = "fzf", height: Optional[str] = "40%") -> None:
        self.executable = executable
        self.height = height

    def build_args(self, prompt: str) -> List[str]:
        args = [
            self.executable,
            f"--prompt={prompt}",
            "--delimiter=\t",
            "--with-nth=2..",
            "--no-multi",
            "--layout=reverse",
        ]
        if self.height:
            args.append(f"--height={self.height}")
        return args

    def choose(self, labels: Sequence[str], prompt: str) -> Optional[int]:
        if not labels:
            return None

        lines = "\n".join(f"{i}\t{label}" for i, label in enumerate(labels))
        try:
            # stderr stays attached to the terminal: fzf draws its UI there
            result = subprocess.run(
                self.build_args(prompt),
                input=lines + "\n",
                stdout=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            return None

        if result.returncode != 0:
            return None

        selected = result.stdout.strip()
        if not selected:
            return None
        try:
            index = int(selected.split("\t", 1)[0])
        except ValueError:
            return None
        return index if 0 <= index < len(labels) else None

    @classmethod
    def is_available(cls) -> bool:
        return shutil.which("fzf") is not None
