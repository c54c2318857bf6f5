#!/usr/bin/env python3
"""Shared types, constants, and data model for the recordscreen package.

This module holds every value type that flows through the recorder pipeline.
Centralizing them keeps the selection engine, the command synthesizer and the
executor agreeing on one vocabulary.

Data Model:
    Screen: One connected display with its geometry
    AudioDevice: One PulseAudio source (capture or monitor kind)
    AudioSelection: Closed sum type NoAudio | MicOnly | SystemOnly | Both
    QualityPreset: One row of the fixed encoding table
    StreamInput, MixPlan, CommandSpec: The synthesized command plan

Constants:
    __version__: Package version string
    DEFAULT_OUTPUT_DIR: Where recordings land
    FRAMERATE: Fixed capture frame rate
    QUALITY_PRESETS: Label -> QualityPreset lookup table
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

# ============================================================================
# VERSION AND METADATA
# ============================================================================

__version__ = "1.0.0"

# ============================================================================
# OUTPUT CONFIGURATION
# ============================================================================

DEFAULT_OUTPUT_DIR: str = "~/Videos"
OUTPUT_PREFIX: str = "recording_"
OUTPUT_SUFFIX: str = ".mp4"
TIMESTAMP_FORMAT: str = "%Y-%m-%d_%H-%M-%S"

# ============================================================================
# CAPTURE AND ENCODING
# ============================================================================

FRAMERATE: int = 30
DEFAULT_DISPLAY: str = ":0.0"
VIDEO_CODEC: str = "libx264"
AUDIO_CODEC: str = "aac"
PIXEL_FORMAT: str = "yuv420p"
MIX_OUTPUT_LABEL: str = "aout"

ENCODER_PRESETS: Tuple[str, ...] = (
    "ultrafast",
    "superfast",
    "veryfast",
    "faster",
    "fast",
    "medium",
    "slow",
    "slower",
    "veryslow",
)


# ============================================================================
# SCREENS
# ============================================================================


@dataclass(frozen=True)
class Screen:
    """A connected display and the region of the X screen it covers."""

    name: str
    width: int
    height: int
    offset_x: int = 0
    offset_y: int = 0
    is_primary: bool = False

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Screen name must be non-empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Screen size must be positive, got {self.width}x{self.height}"
            )

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def geometry(self) -> str:
        return f"{self.size}{self.offset_x:+d}{self.offset_y:+d}"

    @property
    def label(self) -> str:
        text = f"{self.name}  {self.size} at {self.offset_x:+d},{self.offset_y:+d}"
        if self.is_primary:
            text += "  (primary)"
        return text


# ============================================================================
# AUDIO DEVICES
# ============================================================================


class DeviceKind(enum.Enum):
    """Which pool an audio source belongs to."""

    CAPTURE = "capture"  # microphone-like input
    MONITOR = "monitor"  # loopback of a sink ("system audio")


@dataclass(frozen=True)
class AudioDevice:
    """A PulseAudio/PipeWire source as offered to the user."""

    display_name: str
    backend_id: str
    kind: DeviceKind

    def __post_init__(self) -> None:
        if not self.backend_id:
            raise ValueError("Audio device backend id must be non-empty")

    @property
    def label(self) -> str:
        if self.display_name and self.display_name != self.backend_id:
            return f"{self.display_name}  [{self.backend_id}]"
        return self.backend_id


def _require_kind(device: AudioDevice, kind: DeviceKind, role: str) -> None:
    if device.kind is not kind:
        raise ValueError(
            f"{role} must be a {kind.value} device, got {device.kind.value} "
            f"device {device.backend_id!r}"
        )


# ============================================================================
# AUDIO SELECTION (closed sum type)
# ============================================================================


@dataclass(frozen=True)
class NoAudio:
    """Video only."""

    @property
    def devices(self) -> Tuple[AudioDevice, ...]:
        return ()


@dataclass(frozen=True)
class MicOnly:
    mic: AudioDevice

    def __post_init__(self) -> None:
        _require_kind(self.mic, DeviceKind.CAPTURE, "Microphone")

    @property
    def devices(self) -> Tuple[AudioDevice, ...]:
        return (self.mic,)


@dataclass(frozen=True)
class SystemOnly:
    system: AudioDevice

    def __post_init__(self) -> None:
        _require_kind(self.system, DeviceKind.MONITOR, "System audio")

    @property
    def devices(self) -> Tuple[AudioDevice, ...]:
        return (self.system,)


@dataclass(frozen=True)
class Both:
    """Microphone and system audio, mixed into one track."""

    mic: AudioDevice
    system: AudioDevice

    def __post_init__(self) -> None:
        _require_kind(self.mic, DeviceKind.CAPTURE, "Microphone")
        _require_kind(self.system, DeviceKind.MONITOR, "System audio")

    @property
    def devices(self) -> Tuple[AudioDevice, ...]:
        # Stream order: mic is input 1, system is input 2
        return (self.mic, self.system)


AudioSelection = Union[NoAudio, MicOnly, SystemOnly, Both]


class AudioMode(enum.Enum):
    """Audio combinations offered in the first audio menu."""

    NONE = "No audio"
    MIC = "Microphone only"
    SYSTEM = "System audio only"
    BOTH = "Microphone + system audio"


# ============================================================================
# QUALITY PRESETS
# ============================================================================


@dataclass(frozen=True)
class QualityPreset:
    label: str
    crf: int
    encoder_preset: str
    audio_bitrate_kbps: int

    def __post_init__(self) -> None:
        if not 0 <= self.crf <= 51:
            raise ValueError(f"CRF must be in 0..51, got {self.crf}")
        if self.encoder_preset not in ENCODER_PRESETS:
            raise ValueError(f"Unknown encoder preset: {self.encoder_preset!r}")
        if self.audio_bitrate_kbps <= 0:
            raise ValueError("Audio bitrate must be positive")


QUALITY_PRESETS: Dict[str, QualityPreset] = {
    "Low": QualityPreset("Low", crf=35, encoder_preset="ultrafast", audio_bitrate_kbps=128),
    "Medium": QualityPreset("Medium", crf=28, encoder_preset="veryfast", audio_bitrate_kbps=192),
    "High": QualityPreset("High", crf=18, encoder_preset="slow", audio_bitrate_kbps=256),
}

DEFAULT_QUALITY: str = "Medium"

# Order shown in the quality picker
QUALITY_MENU: Tuple[str, ...] = ("High", "Medium", "Low")


# ============================================================================
# COMMAND PLAN
# ============================================================================


@dataclass(frozen=True)
class StreamInput:
    """One entry of the stream index plan.

    Exactly one of ``screen`` (video, index 0) or ``device`` (audio) is set.
    """

    index: int
    kind: str
    screen: Optional[Screen] = None
    device: Optional[AudioDevice] = None

    @property
    def stream_ref(self) -> str:
        return f"{self.index}:{'v' if self.kind == 'video' else 'a'}"


@dataclass(frozen=True)
class MixPlan:
    input_indices: Tuple[int, ...]
    duration: str = "longest"
    normalize: bool = False
    output_label: str = MIX_OUTPUT_LABEL

    @property
    def filter_graph(self) -> str:
        sources = "".join(f"[{i}:a]" for i in self.input_indices)
        return (
            f"{sources}amix=inputs={len(self.input_indices)}"
            f":duration={self.duration}:normalize={int(self.normalize)}"
            f"[{self.output_label}]"
        )


@dataclass(frozen=True)
class CommandSpec:
    """Fully resolved description of one capture/encode run."""

    screen: Screen
    audio: AudioSelection
    quality: QualityPreset
    output_path: Path
    inputs: Tuple[StreamInput, ...] = field(default=())
    mix: Optional[MixPlan] = None
    maps: Tuple[str, ...] = field(default=())
    framerate: int = FRAMERATE

    @property
    def audio_inputs(self) -> Tuple[StreamInput, ...]:
        return tuple(i for i in self.inputs if i.kind == "audio")

    @property
    def has_audio(self) -> bool:
        return len(self.maps) > 1
