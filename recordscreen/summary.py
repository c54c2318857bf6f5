"""Human-readable rendering of a resolved recording and its result."""

from __future__ import annotations

from typing import List

from recordscreen.executor import RecordingResult
from recordscreen.types import Both, CommandSpec, MicOnly, NoAudio, SystemOnly


def format_size(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def describe_audio(spec: CommandSpec) -> List[str]:
    audio = spec.audio
    if isinstance(audio, NoAudio):
        return ["Audio: none (video only)"]
    if isinstance(audio, MicOnly):
        return [f"Mic: {audio.mic.label}"]
    if isinstance(audio, SystemOnly):
        return [f"System Audio: {audio.system.label}"]
    if isinstance(audio, Both):
        return [
            f"Mic: {audio.mic.label}",
            f"System Audio: {audio.system.label}",
            "Audio: mixed into one track",
        ]
    return [f"Audio: {audio!r}"]


def render_summary(spec: CommandSpec) -> str:
    """Multi-line summary shown before recording starts."""
    screen = spec.screen
    quality = spec.quality
    lines = [f"👉 Screen: {screen.name} ({screen.size} at {screen.offset_x:+d},{screen.offset_y:+d})"]
    lines += [f"👉 {line}" for line in describe_audio(spec)]
    lines.append(
        f"👉 Quality: {quality.label} "
        f"(crf {quality.crf}, {quality.encoder_preset}, {quality.audio_bitrate_kbps}k audio)"
    )
    lines.append(f"Output file: {spec.output_path}")
    return "\n".join(lines)


def render_result(result: RecordingResult) -> str:
    if result.size_bytes is None:
        return f"No output written: {result.output_path}"
    return f"Saved: {result.output_path} ({format_size(result.size_bytes)})"
