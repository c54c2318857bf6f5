#!/usr/bin/env python3
"""Audio source discovery via ``pactl``.

Sources are split into two disjoint pools:
- capture: microphones and other real inputs
- monitor: loopbacks of output sinks ("system audio")

Works against PulseAudio and PipeWire (pipewire-pulse), since both answer
``pactl list sources``.
"""

from __future__ import annotations

import subprocess
import sys
from typing import Dict, List, Optional, Tuple

from recordscreen.types import AudioDevice, DeviceKind

DevicePools = Tuple[List[AudioDevice], List[AudioDevice]]


def _classify(name: str, monitor_of: Optional[str] = None) -> DeviceKind:
    if monitor_of and monitor_of.strip().lower() != "n/a":
        return DeviceKind.MONITOR
    if name.endswith(".monitor"):
        return DeviceKind.MONITOR
    return DeviceKind.CAPTURE


def _split(devices: List[AudioDevice]) -> DevicePools:
    capture = [d for d in devices if d.kind is DeviceKind.CAPTURE]
    monitor = [d for d in devices if d.kind is DeviceKind.MONITOR]
    return capture, monitor


def parse_pactl_sources(output: str) -> DevicePools:
    """Parse the long form of ``pactl list sources``.

    Each ``Source #N`` block contributes one device built from its ``Name:``,
    ``Description:`` and ``Monitor of Sink:`` fields. Duplicate names are
    dropped.
    """
    blocks: List[Dict[str, str]] = []
    current: Optional[Dict[str, str]] = None

    for raw in output.splitlines():
        line = raw.strip()
        if line.startswith("Source #"):
            current = {}
            blocks.append(current)
            continue
        if current is None or ":" not in line:
            continue
        key, value = line.split(":", 1)
        # Only top-level fields; property lists use "key = value"
        if key in ("Name", "Description", "Monitor of Sink") and key not in current:
            current[key] = value.strip()

    devices: List[AudioDevice] = []
    seen = set()
    for block in blocks:
        name = block.get("Name")
        if not name or name in seen:
            continue
        seen.add(name)
        devices.append(AudioDevice(
            display_name=block.get("Description") or name,
            backend_id=name,
            kind=_classify(name, block.get("Monitor of Sink")),
        ))

    return _split(devices)


def parse_pactl_short(output: str) -> DevicePools:
    """Parse ``pactl list short sources`` (tab-separated, name in column 2)."""
    devices: List[AudioDevice] = []
    seen = set()
    for line in output.strip().split("\n"):
        if not line:
            continue
        parts = line.split("\t")
        if len(parts) < 2 or not parts[1] or parts[1] in seen:
            continue
        seen.add(parts[1])
        devices.append(AudioDevice(
            display_name=parts[1],
            backend_id=parts[1],
            kind=_classify(parts[1]),
        ))
    return _split(devices)


def _run_pactl(*args: str) -> str:
    result = subprocess.run(
        ["pactl", *args],
        capture_output=True, text=True, check=True
    )
    return result.stdout


def list_audio_devices(verbose: bool = False) -> DevicePools:
    """Enumerate capture and monitor sources.

    Returns:
        Tuple (capture, monitor); both empty if pactl is unavailable.
    """
    try:
        pools = parse_pactl_sources(_run_pactl("list", "sources"))
        if pools[0] or pools[1]:
            return pools
        return parse_pactl_short(_run_pactl("list", "short", "sources"))
    except (subprocess.CalledProcessError, FileNotFoundError):
        if verbose:
            print("Warning: pactl unavailable, no audio sources", file=sys.stderr)
        return [], []
