#!/usr/bin/env python3
"""Screen discovery and geometry parsing.

Screens are read from ``xrandr --query``, the same source the shell recorder
used. When xrandr is unavailable (e.g. a nested or headless X server without
RandR tools) the monitors reported by mss are used instead; those have no
output names, so they are called ``monitor-1``, ``monitor-2``, ...

Functions:
    parse_geometry: Parse a ``WxH+X+Y`` string into integers
    parse_xrandr: Parse xrandr output into Screen objects
    screens_from_monitors: Convert mss monitor dicts into Screen objects
    list_screens: Enumerate connected screens (may return an empty list)
"""

from __future__ import annotations

import re
import subprocess
import sys
from typing import Any, Dict, List, Sequence, Set, Tuple

from recordscreen.types import Screen

_GEOMETRY_RE = re.compile(r"^(\d+)x(\d+)([+-]\d+)([+-]\d+)$")

# "<name> connected [primary] <WxH+X+Y> ..." - geometry is absent when the
# output is connected but has no active mode.
_XRANDR_LINE_RE = re.compile(
    r"^(?P<name>\S+)\s+connected"
    r"(?P<primary>\s+primary)?"
    r"(?:\s+(?P<geometry>\d+x\d+[+-]\d+[+-]\d+))?"
)


def parse_geometry(text: str) -> Tuple[int, int, int, int]:
    """Parse an X geometry string.

    Args:
        text: Geometry like ``1920x1080+0+0`` or ``1280x1024-1280+0``.

    Returns:
        Tuple (width, height, offset_x, offset_y).

    Raises:
        ValueError: If the string is not a valid geometry or the size is zero.

    Examples:
        >>> parse_geometry("1920x1080+1920+0")
        (1920, 1080, 1920, 0)
    """
    match = _GEOMETRY_RE.match(text.strip())
    if not match:
        raise ValueError(f"Invalid geometry: {text!r}")

    width, height = int(match.group(1)), int(match.group(2))
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid geometry: {text!r} (size must be positive)")

    return width, height, int(match.group(3)), int(match.group(4))


def parse_xrandr(output: str) -> List[Screen]:
    """Parse ``xrandr --query`` output into connected, active screens.

    Disconnected outputs, connected outputs without a usable (non-zero)
    mode and repeated output names are skipped.
    """
    screens: List[Screen] = []
    seen: Set[str] = set()

    for line in output.splitlines():
        match = _XRANDR_LINE_RE.match(line)
        if not match or not match.group("geometry"):
            continue

        name = match.group("name")
        if name in seen:
            continue

        try:
            width, height, x, y = parse_geometry(match.group("geometry"))
            screen = Screen(
                name=name,
                width=width,
                height=height,
                offset_x=x,
                offset_y=y,
                is_primary=bool(match.group("primary")),
            )
        except ValueError:
            # zero-size mode, e.g. "VIRTUAL1 connected 0x0+0+0"
            continue
        screens.append(screen)
        seen.add(name)

    return screens


def screens_from_monitors(monitors: Sequence[Dict[str, Any]]) -> List[Screen]:
    """Convert mss monitor dicts (``left``, ``top``, ``width``, ``height``).

    ``monitors`` excludes mss's combined virtual screen at index 0; the first
    entry is treated as primary, matching mss's own convention.
    """
    screens: List[Screen] = []
    for i, monitor in enumerate(monitors, 1):
        if monitor.get("width", 0) <= 0 or monitor.get("height", 0) <= 0:
            continue
        screens.append(Screen(
            name=f"monitor-{i}",
            width=int(monitor["width"]),
            height=int(monitor["height"]),
            offset_x=int(monitor.get("left", 0)),
            offset_y=int(monitor.get("top", 0)),
            is_primary=(i == 1),
        ))
    return screens


def list_mss_monitors() -> List[Dict[str, Any]]:
    """Get all physical monitor regions from mss."""
    from mss import mss

    with mss() as sct:
        return [dict(m) for m in sct.monitors[1:]]


def list_screens(verbose: bool = False) -> List[Screen]:
    """Enumerate connected screens.

    Args:
        verbose: Whether to report which enumeration source was used.

    Returns:
        Screens in xrandr order; empty if nothing could be enumerated.
    """
    try:
        result = subprocess.run(
            ["xrandr", "--query"],
            capture_output=True, text=True, check=True
        )
        screens = parse_xrandr(result.stdout)
        if screens:
            return screens
    except (subprocess.CalledProcessError, FileNotFoundError):
        if verbose:
            print("xrandr unavailable, falling back to mss", file=sys.stderr)

    try:
        return screens_from_monitors(list_mss_monitors())
    except Exception as e:
        # mss raises its own ScreenShotError when no X server is reachable
        if verbose:
            print(f"Warning: Could not enumerate monitors: {e}", file=sys.stderr)
        return []
