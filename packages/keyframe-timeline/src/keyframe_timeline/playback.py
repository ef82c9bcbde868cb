# SPDX-License-Identifier: MIT
"""Timed playback of a keyframe timeline."""

from __future__ import annotations

import dataclasses as dc
import math
from typing import Iterator

from keyframe_timeline.frame import Frame
from keyframe_timeline.timeline import Timeline

# Interpolation needs a frame before and two after the current one, so the
# first and last two keyframes only ever serve as spline context.
MIN_KEYFRAMES = 4

SPEED_STEP_MS = 100
MIN_MS_BETWEEN_KEYFRAMES = 100


@dc.dataclass
class PlaybackParams:
    """Encapsulates the timing of an animation playback."""

    frames_per_second: float = 60.0
    """Rendered frames per second of playback."""

    ms_between_keyframes: int = 2000
    """Time, in milliseconds, spent going from one keyframe to the next."""

    def __post_init__(self):
        if self.frames_per_second <= 0:
            raise ValueError(
                f"frames_per_second must be positive, got {self.frames_per_second}"
            )
        if self.ms_between_keyframes < MIN_MS_BETWEEN_KEYFRAMES:
            raise ValueError(
                f"ms_between_keyframes must be at least {MIN_MS_BETWEEN_KEYFRAMES}, "
                f"got {self.ms_between_keyframes}"
            )


class Playback:
    """Plays a timeline from its second keyframe to its second-to-last one."""

    def __init__(self, timeline: Timeline, params: PlaybackParams | None = None):
        self.timeline = timeline
        self.params = params or PlaybackParams()
        self.playing = False

    def start(self) -> bool:
        """Put the cursor on the first animatable keyframe.

        Returns:
            False if the timeline has too few keyframes to animate
        """
        if self.timeline.count() < MIN_KEYFRAMES:
            print(
                f"Cannot play animation with fewer than {MIN_KEYFRAMES} keyframes "
                f"(have {self.timeline.count()})"
            )
            return False
        self.timeline.go_to_beginning()
        self.timeline.advance_current_frame()
        self.playing = True
        return True

    def step(self, elapsed_ms: float) -> Frame | None:
        """Render the pose at ``elapsed_ms`` since playback started.

        Returns:
            The interpolated frame, or None once playback has finished. On
            finishing, the last animatable keyframe is shown.
        """
        if not self.playing:
            return None
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms must not be negative, got {elapsed_ms}")

        t = elapsed_ms / self.params.ms_between_keyframes
        segment = math.floor(t)
        target = 1 + segment
        last_animatable = self.timeline.count() - 3

        if target > last_animatable:
            while self.timeline.current_index < last_animatable + 1:
                self.timeline.advance()
            self.timeline.show_current_frame()
            self.playing = False
            print("Animation finished")
            return None

        while self.timeline.current_index < target:
            self.timeline.advance()
        while self.timeline.current_index > target:
            self.timeline.regress()
        return self.timeline.interpolate(t - segment)

    def frames(self) -> Iterator[Frame]:
        """Play from the start, yielding one interpolated frame per tick."""
        if not self.start():
            return
        tick_ms = 1000.0 / self.params.frames_per_second
        tick = 0
        while True:
            frame = self.step(tick * tick_ms)
            if frame is None:
                return
            yield frame
            tick += 1

    def faster(self) -> int:
        """Shorten the time between keyframes, returning the new value."""
        self.params.ms_between_keyframes = max(
            MIN_MS_BETWEEN_KEYFRAMES, self.params.ms_between_keyframes - SPEED_STEP_MS
        )
        print(f"Time between keyframes: {self.params.ms_between_keyframes} ms")
        return self.params.ms_between_keyframes

    def slower(self) -> int:
        """Lengthen the time between keyframes, returning the new value."""
        self.params.ms_between_keyframes += SPEED_STEP_MS
        print(f"Time between keyframes: {self.params.ms_between_keyframes} ms")
        return self.params.ms_between_keyframes
