"""Error taxonomy for recordscreen.

Every resolution failure ends the session: the CLI reports the message and
exits non-zero before any command is run.
"""

from __future__ import annotations


class RecorderError(Exception):
    """Base class for all recorder errors."""


class NoCandidates(RecorderError):
    """An enumeration returned nothing to choose from."""


class SelectionAborted(RecorderError):
    """The user declined a required choice."""


class DeviceSelectionAborted(SelectionAborted):
    """The user picked an audio combination, then declined one of its devices."""


class InconsistentAudioState(RecorderError):
    """The synthesizer received an audio selection it cannot map.

    Only reachable through a programming error; never recovered from.
    """


class ExecutorError(RecorderError):
    """ffmpeg could not be started."""
