# SPDX-License-Identifier: MIT
"""Keyframe Timeline - keyframe editing and spline playback for scene poses."""

from keyframe_timeline.errors import DecodeError, PreconditionViolation, TimelineError
from keyframe_timeline.frame import Frame
from keyframe_timeline.playback import Playback, PlaybackParams
from keyframe_timeline.timeline import Timeline

__version__ = "0.1.0"
__all__ = [
    "DecodeError",
    "Frame",
    "Playback",
    "PlaybackParams",
    "PreconditionViolation",
    "Timeline",
    "TimelineError",
]
