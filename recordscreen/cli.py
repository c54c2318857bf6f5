#!/usr/bin/env python3
"""Command-line interface for recordscreen.

Running ``record-screen`` with no arguments walks through the interactive
flow: pick a screen, pick audio sources, pick a quality, then record until
ffmpeg is stopped with Ctrl-C. The optional flags only list devices, print
the command without running it, or add progress output.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from recordscreen.choosers import default_chooser
from recordscreen.choosers.base import Chooser
from recordscreen.command import build_ffmpeg_args, format_command, plan_output_path, synthesize
from recordscreen.config import RecorderConfig, load_config
from recordscreen.devices import list_audio_devices
from recordscreen.errors import RecorderError
from recordscreen.executor import run_recording
from recordscreen.geometry import list_screens
from recordscreen.selection import choose_quality, resolve_audio, resolve_screen
from recordscreen.summary import render_result, render_summary
from recordscreen.types import AudioDevice, CommandSpec, Screen, __version__


def status(message: str) -> None:
    print(message, file=sys.stderr)


def error(message: str) -> None:
    print(f"❌ Error: {message}", file=sys.stderr)


def configure_session(
    screens: Sequence[Screen],
    capture_pool: Sequence[AudioDevice],
    monitor_pool: Sequence[AudioDevice],
    chooser: Chooser,
    output_dir: Path,
    now: Optional[datetime] = None,
) -> CommandSpec:
    """Resolve every choice and synthesize the command plan.

    Any RecorderError raised here ends the session before a CommandSpec
    exists.
    """
    screen = resolve_screen(screens, chooser)
    audio = resolve_audio(capture_pool, monitor_pool, chooser)
    quality = choose_quality(chooser)
    output_path = plan_output_path(output_dir, now)
    return synthesize(screen, audio, quality, output_path)


def list_screens_command(verbose: bool) -> int:
    screens = list_screens(verbose)
    if not screens:
        print("No screens found (is xrandr installed and DISPLAY set?)")
        return 1
    print(f"Found {len(screens)} screen(s):")
    for screen in screens:
        print(f"  {screen.label}")
    return 0


def list_audio_command(verbose: bool) -> int:
    capture, monitor = list_audio_devices(verbose)
    if not capture and not monitor:
        print("No audio sources found (PulseAudio/PipeWire may not be running)")
        return 0
    print("Microphones:")
    for device in capture:
        print(f"  {device.label}")
    print("System audio:")
    for device in monitor:
        print(f"  {device.label}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record-screen",
        description="Interactive ffmpeg screen recorder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Flow:
  1. Pick the screen to record (skipped when only one is connected)
  2. Pick audio: none, microphone, system audio, or both mixed
  3. Pick quality: High, Medium (default), Low
  4. Record until Ctrl-C; the file is finalized and its size reported

Environment:
  RECORDSCREEN_OUTPUT_DIR   Output directory (default: ~/Videos)
  RECORDSCREEN_DISPLAY      X display to grab (default: $DISPLAY or :0.0)
  RECORDSCREEN_CHOOSER      fzf or prompt (default: fzf if installed)
  RECORDSCREEN_FFMPEG       ffmpeg executable (default: ffmpeg)
  RECORDSCREEN_VERBOSE      1 to always show progress

Examples:
  # Full interactive flow
  record-screen

  # Show the ffmpeg command that would run
  record-screen --dry-run
""",
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the ffmpeg command instead of running it")
    parser.add_argument("--list-screens", action="store_true",
                        help="List connected screens and exit")
    parser.add_argument("--list-audio", action="store_true",
                        help="List audio sources and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show progress")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def run_session(config: RecorderConfig, dry_run: bool, verbose: bool) -> int:
    try:
        chooser = default_chooser(config.chooser)
    except (KeyError, RuntimeError) as e:
        error(str(e))
        return 1
    if verbose:
        status(f"Using chooser: {chooser.display_name}")

    screens = list_screens(verbose)
    capture, monitor = list_audio_devices(verbose)
    if verbose:
        status(f"Found {len(screens)} screen(s), {len(capture)} microphone(s), "
               f"{len(monitor)} system audio source(s)")

    try:
        spec = configure_session(screens, capture, monitor, chooser, config.output_dir)
    except RecorderError as e:
        error(str(e))
        return 1

    status("")
    status(render_summary(spec))

    if dry_run:
        print(format_command(build_ffmpeg_args(spec, display=config.display, ffmpeg=config.ffmpeg)))
        return 0

    status("")
    status("🚀 Starting recording... (Ctrl-C to stop)")
    try:
        result = run_recording(spec, display=config.display, ffmpeg=config.ffmpeg,
                               verbose=verbose)
    except RecorderError as e:
        error(str(e))
        return 1

    status("")
    if result.ok:
        print(render_result(result))
        return 0

    error(f"Recording failed (ffmpeg exit code {result.returncode})")
    if result.size_bytes is not None:
        print(render_result(result))
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = load_config()
    verbose = args.verbose or config.verbose

    if args.list_screens:
        return list_screens_command(verbose)
    if args.list_audio:
        return list_audio_command(verbose)

    return run_session(config, args.dry_run, verbose)


if __name__ == "__main__":
    sys.exit(main())
