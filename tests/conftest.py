"""Shared pytest fixtures for recordscreen tests."""

import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from recordscreen.choosers.base import Chooser
from recordscreen.types import AudioDevice, DeviceKind, Screen


class ScriptedChooser(Chooser):
    """Chooser that answers from a fixed script and records every prompt."""

    name = "scripted"
    display_name = "scripted test chooser"

    def __init__(self, answers: Sequence[Optional[int]] = ()) -> None:
        self.answers = list(answers)
        self.calls: List[Tuple[List[str], str]] = []

    def choose(self, labels: Sequence[str], prompt: str) -> Optional[int]:
        self.calls.append((list(labels), prompt))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r} {list(labels)!r}")
        return self.answers.pop(0)

    @classmethod
    def is_available(cls) -> bool:
        return True


@pytest.fixture
def make_chooser():
    """Factory for ScriptedChooser instances."""
    return ScriptedChooser


@pytest.fixture
def primary_screen() -> Screen:
    return Screen("HDMI-1", 1920, 1080, 0, 0, is_primary=True)


@pytest.fixture
def side_screen() -> Screen:
    return Screen("DP-2", 2560, 1440, 1920, 0)


@pytest.fixture
def usb_mic() -> AudioDevice:
    return AudioDevice("USB Mic", "alsa_input.usb-mic.analog-stereo", DeviceKind.CAPTURE)


@pytest.fixture
def laptop_mic() -> AudioDevice:
    return AudioDevice("Built-in Audio Analog Stereo", "alsa_input.pci-0000_00_1f.3.analog-stereo",
                       DeviceKind.CAPTURE)


@pytest.fixture
def speakers_monitor() -> AudioDevice:
    return AudioDevice("Monitor of Speakers", "alsa_output.pci-0000_00_1f.3.analog-stereo.monitor",
                       DeviceKind.MONITOR)


@pytest.fixture
def hdmi_monitor() -> AudioDevice:
    return AudioDevice("Monitor of HDMI Audio", "alsa_output.hdmi-stereo.monitor",
                       DeviceKind.MONITOR)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """A not-yet-existing output directory."""
    return tmp_path / "Videos"
