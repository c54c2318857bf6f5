#!/usr/bin/env python3
"""Run the synthesized ffmpeg command until it finishes or is interrupted.

Ctrl-C (or SIGTERM) does not kill ffmpeg outright: it receives SIGINT so it
can finalize the MP4 container, and is only killed if it does not exit
within STOP_TIMEOUT seconds.
"""

from __future__ import annotations

import os
import shutil
import signal
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from recordscreen.command import build_ffmpeg_args, format_command
from recordscreen.errors import ExecutorError
from recordscreen.types import DEFAULT_DISPLAY, CommandSpec

STOP_TIMEOUT: float = 10.0


@dataclass(frozen=True)
class RecordingResult:
    output_path: Path
    size_bytes: Optional[int]
    returncode: int
    interrupted: bool = False

    @property
    def ok(self) -> bool:
        # ffmpeg exits 255 when stopped by a signal, even after a clean finalize
        return self.size_bytes is not None and (self.returncode == 0 or self.interrupted)


def check_ffmpeg(ffmpeg: str = "ffmpeg") -> str:
    """Resolve the ffmpeg executable.

    Raises:
        ExecutorError: If it cannot be found on PATH.
    """
    path = shutil.which(ffmpeg)
    if not path:
        raise ExecutorError(f"{ffmpeg} not found. Install: apt install ffmpeg")
    return path


def stop_process(proc: "subprocess.Popen[Any]", timeout: float = STOP_TIMEOUT) -> None:
    """Ask ffmpeg to finish with SIGINT; kill it if it hangs.

    A second Ctrl-C while waiting kills ffmpeg immediately.
    """
    if proc.poll() is not None:
        return
    proc.send_signal(signal.SIGINT)
    try:
        proc.wait(timeout=timeout)
    except (subprocess.TimeoutExpired, KeyboardInterrupt):
        proc.kill()
        proc.wait()


def _raise_interrupt(signum: int, frame: Any) -> None:
    raise KeyboardInterrupt


def output_size(path: Path) -> Optional[int]:
    if path.exists():
        return os.path.getsize(path)
    return None


def run_recording(
    spec: CommandSpec,
    display: str = DEFAULT_DISPLAY,
    ffmpeg: str = "ffmpeg",
    verbose: bool = False,
) -> RecordingResult:
    """Run ffmpeg for ``spec`` and report the written file.

    Args:
        spec: Command plan to execute.
        display: X display passed to x11grab.
        ffmpeg: ffmpeg executable.
        verbose: Whether to print the full command line.

    Returns:
        RecordingResult with the output size (None if nothing was written).

    Raises:
        ExecutorError: If ffmpeg is missing or cannot be started.
    """
    executable = check_ffmpeg(ffmpeg)
    args: List[str] = build_ffmpeg_args(spec, display=display, ffmpeg=executable)

    if verbose:
        print(f"Running: {format_command(args)}", file=sys.stderr)

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    interrupted = False
    try:
        try:
            # stdin detached so ffmpeg does not consume terminal keystrokes
            proc = subprocess.Popen(args, stdin=subprocess.DEVNULL)
        except OSError as e:
            raise ExecutorError(f"Could not start ffmpeg: {e}") from e

        try:
            proc.wait()
        except KeyboardInterrupt:
            interrupted = True
            if verbose:
                print("\nStopping recording...", file=sys.stderr)
            stop_process(proc)
    finally:
        signal.signal(signal.SIGTERM, previous)

    return RecordingResult(
        output_path=spec.output_path,
        size_bytes=output_size(spec.output_path),
        returncode=proc.returncode,
        interrupted=interrupted,
    )
