#!/usr/bin/env python3
"""Turn a resolved configuration into an ffmpeg capture command.

The stream index plan is fixed:

    index 0    x11grab video of the selected screen
    index 1    microphone (MicOnly, Both) or system audio (SystemOnly)
    index 2    system audio (Both only)

Mapping by audio state:

    NoAudio     -map 0:v
    MicOnly     -map 0:v -map 1:a
    SystemOnly  -map 0:v -map 1:a
    Both        -filter_complex [1:a][2:a]amix=...[aout] -map 0:v -map [aout]

synthesize() is pure and cannot fail for well-typed input. I/O (creating the
output directory) happens in plan_output_path() before synthesis.
"""

from __future__ import annotations

import shlex
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from recordscreen.errors import InconsistentAudioState
from recordscreen.types import (
    AUDIO_CODEC,
    DEFAULT_DISPLAY,
    FRAMERATE,
    OUTPUT_PREFIX,
    OUTPUT_SUFFIX,
    PIXEL_FORMAT,
    TIMESTAMP_FORMAT,
    VIDEO_CODEC,
    AudioSelection,
    Both,
    CommandSpec,
    MicOnly,
    MixPlan,
    NoAudio,
    QualityPreset,
    Screen,
    StreamInput,
    SystemOnly,
)


def output_filename(now: datetime) -> str:
    """``recording_YYYY-MM-DD_HH-MM-SS.mp4`` for the given time."""
    return f"{OUTPUT_PREFIX}{now.strftime(TIMESTAMP_FORMAT)}{OUTPUT_SUFFIX}"


def plan_output_path(output_dir: Union[str, Path], now: Optional[datetime] = None) -> Path:
    """Create ``output_dir`` and return a fresh recording path inside it.

    If a recording with the same timestamp already exists, ``_1``, ``_2``, ...
    is appended to the stem.
    """
    directory = Path(output_dir).expanduser()
    directory.mkdir(parents=True, exist_ok=True)

    first = directory / output_filename(now or datetime.now())
    candidate = first
    counter = 1
    while candidate.exists():
        candidate = first.with_name(f"{first.stem}_{counter}{OUTPUT_SUFFIX}")
        counter += 1
    return candidate


def _audio_plan(audio: AudioSelection) -> Tuple[Optional[MixPlan], Tuple[str, ...]]:
    if isinstance(audio, NoAudio):
        return None, ("0:v",)
    if isinstance(audio, (MicOnly, SystemOnly)):
        return None, ("0:v", "1:a")
    if isinstance(audio, Both):
        mix = MixPlan(input_indices=(1, 2))
        return mix, ("0:v", f"[{mix.output_label}]")
    raise InconsistentAudioState(f"Unsupported audio selection: {audio!r}")


def synthesize(
    screen: Screen,
    audio: AudioSelection,
    quality: QualityPreset,
    output_path: Union[str, Path],
) -> CommandSpec:
    """Build the command plan for one recording.

    Args:
        screen: Screen to capture (input 0).
        audio: Resolved audio selection; its devices become inputs 1..n in
            mic-then-system order.
        quality: Encoding parameters, copied verbatim into the plan.
        output_path: Destination file, normally from plan_output_path().

    Returns:
        Immutable CommandSpec.

    Raises:
        InconsistentAudioState: Only if ``audio`` is not one of the four
            AudioSelection variants.
    """
    mix, maps = _audio_plan(audio)

    inputs: List[StreamInput] = [StreamInput(index=0, kind="video", screen=screen)]
    for index, device in enumerate(audio.devices, 1):
        inputs.append(StreamInput(index=index, kind="audio", device=device))

    expected_audio = len(mix.input_indices) if mix else len(maps) - 1
    if len(inputs) - 1 != expected_audio:
        raise InconsistentAudioState(
            f"{type(audio).__name__} produced {len(inputs) - 1} audio inputs, "
            f"expected {expected_audio}"
        )

    return CommandSpec(
        screen=screen,
        audio=audio,
        quality=quality,
        output_path=Path(output_path),
        inputs=tuple(inputs),
        mix=mix,
        maps=maps,
        framerate=FRAMERATE,
    )


def build_ffmpeg_args(
    spec: CommandSpec,
    display: str = DEFAULT_DISPLAY,
    ffmpeg: str = "ffmpeg",
) -> List[str]:
    """Translate a CommandSpec into an ffmpeg argument vector.

    Args:
        spec: Command plan from synthesize().
        display: X display to grab (e.g., ":0.0").
        ffmpeg: ffmpeg executable name or path.

    Returns:
        Argument list suitable for subprocess (argv[0] is ``ffmpeg``).
    """
    args: List[str] = [ffmpeg, "-hide_banner"]

    for stream in spec.inputs:
        if stream.kind == "video" and stream.screen is not None:
            screen = stream.screen
            args += [
                "-f", "x11grab",
                "-framerate", str(spec.framerate),
                "-video_size", screen.size,
                "-i", f"{display}+{screen.offset_x},{screen.offset_y}",
            ]
        elif stream.device is not None:
            args += ["-f", "pulse", "-i", stream.device.backend_id]

    if spec.mix is not None:
        args += ["-filter_complex", spec.mix.filter_graph]

    for target in spec.maps:
        args += ["-map", target]

    quality = spec.quality
    args += [
        "-c:v", VIDEO_CODEC,
        "-preset", quality.encoder_preset,
        "-crf", str(quality.crf),
        "-pix_fmt", PIXEL_FORMAT,
    ]
    if spec.has_audio:
        args += ["-c:a", AUDIO_CODEC, "-b:a", f"{quality.audio_bitrate_kbps}k"]

    args.append(str(spec.output_path))
    return args


def format_command(args: Sequence[str]) -> str:
    """Shell-quoted rendering of an argument vector, for display."""
    return " ".join(shlex.quote(a) for a in args)
