#!/usr/bin/env python3
"""Resolve the user's screen, audio and quality choices.

Two rules hold for every choice made here:

- A list with exactly one option is auto-selected and the chooser is never
  called, so single-display and single-device setups are not prompted.
- Declining a screen or audio choice aborts the whole session. Nothing is
  silently dropped: choosing "Microphone + system audio" and then declining
  the system device raises DeviceSelectionAborted rather than recording
  with the microphone only.

Quality is the exception: declining it falls back to the Medium preset.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from recordscreen.choosers.base import Chooser
from recordscreen.errors import DeviceSelectionAborted, NoCandidates, SelectionAborted
from recordscreen.types import (
    DEFAULT_QUALITY,
    QUALITY_MENU,
    QUALITY_PRESETS,
    AudioDevice,
    AudioMode,
    AudioSelection,
    Both,
    MicOnly,
    NoAudio,
    QualityPreset,
    Screen,
    SystemOnly,
)


def choose_one(labels: Sequence[str], prompt: str, chooser: Chooser) -> Optional[int]:
    """Return the chosen index, auto-picking a single option.

    Returns:
        0 without prompting for one option, None for no options, otherwise
        whatever the chooser returns.
    """
    if not labels:
        return None
    if len(labels) == 1:
        return 0
    return chooser.choose(list(labels), prompt)


def order_screens(candidates: Sequence[Screen]) -> List[Screen]:
    """Primary screen first, the rest in enumeration order."""
    return sorted(candidates, key=lambda s: not s.is_primary)


def resolve_screen(candidates: Sequence[Screen], chooser: Chooser) -> Screen:
    """Resolve exactly one screen to record.

    Raises:
        NoCandidates: If no screens were enumerated.
        SelectionAborted: If the user declined to pick among several screens.
    """
    if not candidates:
        raise NoCandidates("No connected screens found")

    screens = order_screens(candidates)
    index = choose_one([s.label for s in screens], "Screen> ", chooser)
    if index is None:
        raise SelectionAborted("No screen selected")
    return screens[index]


def audio_options(
    capture_pool: Sequence[AudioDevice], monitor_pool: Sequence[AudioDevice]
) -> List[AudioMode]:
    """Audio combinations that are possible with the given pools."""
    options = [AudioMode.NONE]
    if capture_pool:
        options.append(AudioMode.MIC)
    if monitor_pool:
        options.append(AudioMode.SYSTEM)
    if capture_pool and monitor_pool:
        options.append(AudioMode.BOTH)
    return options


def _pick_device(pool: Sequence[AudioDevice], prompt: str, what: str,
                 chooser: Chooser) -> AudioDevice:
    index = choose_one([d.label for d in pool], prompt, chooser)
    if index is None:
        raise DeviceSelectionAborted(f"No {what} selected")
    return pool[index]


def resolve_audio(
    capture_pool: Sequence[AudioDevice],
    monitor_pool: Sequence[AudioDevice],
    chooser: Chooser,
) -> AudioSelection:
    """Resolve the audio combination and its devices.

    Raises:
        SelectionAborted: If the user declined the combination menu.
        DeviceSelectionAborted: If the user declined a device the chosen
            combination requires.
    """
    options = audio_options(capture_pool, monitor_pool)
    index = choose_one([o.value for o in options], "Audio> ", chooser)
    if index is None:
        raise SelectionAborted("No audio option selected")
    mode = options[index]

    if mode is AudioMode.NONE:
        return NoAudio()
    if mode is AudioMode.MIC:
        return MicOnly(_pick_device(capture_pool, "Microphone> ", "microphone", chooser))
    if mode is AudioMode.SYSTEM:
        return SystemOnly(_pick_device(monitor_pool, "System Audio> ", "system audio source", chooser))

    mic = _pick_device(capture_pool, "Microphone> ", "microphone", chooser)
    system = _pick_device(monitor_pool, "System Audio> ", "system audio source", chooser)
    return Both(mic=mic, system=system)


def resolve_quality(label: Optional[str]) -> QualityPreset:
    """Look up a quality preset by label, defaulting to Medium.

    Matching ignores case and surrounding whitespace.

    Examples:
        >>> resolve_quality("High").crf
        18
        >>> resolve_quality("nonsense").label
        'Medium'
    """
    if label:
        wanted = label.strip().lower()
        for key, preset in QUALITY_PRESETS.items():
            if key.lower() == wanted:
                return preset
    return QUALITY_PRESETS[DEFAULT_QUALITY]


def choose_quality(chooser: Chooser) -> QualityPreset:
    """Prompt for a quality preset; declining gives the default."""
    index = choose_one(list(QUALITY_MENU), "Quality> ", chooser)
    return resolve_quality(QUALITY_MENU[index] if index is not None else None)
