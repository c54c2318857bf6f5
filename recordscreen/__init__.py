#!/usr/bin/env python3
"""Package initialization and public API for recordscreen.

recordscreen is an interactive screen recorder: it asks which screen to
capture, which audio sources to record (none, microphone, system audio or
both mixed) and which quality to use, then builds and runs the matching
ffmpeg command.

Public API:
    # Discovery
    list_screens() -> List[Screen]
    list_audio_devices() -> (capture, monitor)

    # Selection
    resolve_screen(candidates, chooser) -> Screen
    resolve_audio(capture_pool, monitor_pool, chooser) -> AudioSelection
    resolve_quality(label) -> QualityPreset

    # Command synthesis and execution
    plan_output_path(output_dir) -> Path
    synthesize(screen, audio, quality, output_path) -> CommandSpec
    build_ffmpeg_args(spec, display) -> List[str]
    run_recording(spec, display) -> RecordingResult

Usage as a library:
    ```python
    from recordscreen import (
        Screen, NoAudio, resolve_quality, synthesize, build_ffmpeg_args,
    )

    screen = Screen("HDMI-1", 1920, 1080, 0, 0, is_primary=True)
    spec = synthesize(screen, NoAudio(), resolve_quality("High"), "/tmp/out.mp4")
    print(build_ffmpeg_args(spec))
    ```

Usage as CLI:
    ```bash
    record-screen
    python -m recordscreen --dry-run
    ```
"""

from __future__ import annotations

from recordscreen.types import (
    __version__,
    DEFAULT_OUTPUT_DIR,
    FRAMERATE,
    QUALITY_PRESETS,
    DEFAULT_QUALITY,
    AudioDevice,
    AudioMode,
    AudioSelection,
    Both,
    CommandSpec,
    DeviceKind,
    MicOnly,
    MixPlan,
    NoAudio,
    QualityPreset,
    Screen,
    StreamInput,
    SystemOnly,
)

from recordscreen.errors import (
    RecorderError,
    NoCandidates,
    SelectionAborted,
    DeviceSelectionAborted,
    InconsistentAudioState,
    ExecutorError,
)

from recordscreen.geometry import list_screens, parse_geometry, parse_xrandr
from recordscreen.devices import list_audio_devices, parse_pactl_sources, parse_pactl_short

from recordscreen.selection import (
    audio_options,
    choose_one,
    choose_quality,
    resolve_audio,
    resolve_quality,
    resolve_screen,
)

from recordscreen.command import (
    build_ffmpeg_args,
    format_command,
    plan_output_path,
    synthesize,
)

from recordscreen.executor import RecordingResult, run_recording
from recordscreen.choosers import Chooser, available_choosers, default_chooser, get_chooser
from recordscreen.cli import main

__all__ = [
    "__version__",
    "DEFAULT_OUTPUT_DIR",
    "FRAMERATE",
    "QUALITY_PRESETS",
    "DEFAULT_QUALITY",
    "AudioDevice",
    "AudioMode",
    "AudioSelection",
    "Both",
    "CommandSpec",
    "DeviceKind",
    "MicOnly",
    "MixPlan",
    "NoAudio",
    "QualityPreset",
    "Screen",
    "StreamInput",
    "SystemOnly",
    "RecorderError",
    "NoCandidates",
    "SelectionAborted",
    "DeviceSelectionAborted",
    "InconsistentAudioState",
    "ExecutorError",
    "list_screens",
    "parse_geometry",
    "parse_xrandr",
    "list_audio_devices",
    "parse_pactl_sources",
    "parse_pactl_short",
    "audio_options",
    "choose_one",
    "choose_quality",
    "resolve_audio",
    "resolve_quality",
    "resolve_screen",
    "build_ffmpeg_args",
    "format_command",
    "plan_output_path",
    "synthesize",
    "RecordingResult",
    "run_recording",
    "Chooser",
    "available_choosers",
    "default_chooser",
    "get_chooser",
    "main",
]
