# SPDX-License-Identifier: MIT
"""Keyframe timeline: an ordered list of poses with a cursor."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from keyframe_timeline.errors import PreconditionViolation
from keyframe_timeline.frame import Frame
from keyframe_timeline.persistence import load_frames, save_frames

if TYPE_CHECKING:
    from keyframe_timeline.scene.scene_graph import Scene


class Timeline:
    """Ordered keyframes plus a cursor marking the current one.

    The cursor is a single index into ``_frames``. When the timeline is empty
    the cursor is undefined and the index is 0; otherwise the index always
    names an existing frame. Whenever a frame becomes current it is rendered
    to the attached scene, if any.
    """

    def __init__(self, frames: Iterable[Frame] = (), *, scene: Scene | None = None):
        """Initialize timeline.

        Args:
            frames: Keyframes in temporal order; the cursor starts on the first
            scene: Scene to capture poses from and render poses to
        """
        self.scene = scene
        self._frames: list[Frame] = list(frames)
        self._index = 0

    @classmethod
    def load(cls, path: Path, *, scene: Scene | None = None) -> Timeline:
        """Load a timeline from a keyframe file. See :func:`load_frames`."""
        expected_size = len(scene) if scene is not None else None
        return cls(load_frames(path, expected_size=expected_size), scene=scene)

    def save(self, path: Path) -> None:
        """Write every keyframe to ``path``, one per line."""
        save_frames(path, self._frames)

    # State queries

    def is_defined(self) -> bool:
        """Return whether there is a current frame."""
        if not self._frames:
            self._index = 0
            return False
        return True

    def count(self) -> int:
        """Return the number of stored keyframes."""
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def can_animate(self) -> bool:
        """Return whether two more keyframes follow the current one."""
        return self.is_defined() and self._index < len(self._frames) - 2

    @property
    def current_index(self) -> int | None:
        """Index of the current frame, or None when undefined."""
        return self._index if self.is_defined() else None

    @property
    def current_frame(self) -> Frame | None:
        """The current frame, or None when undefined."""
        return self._frames[self._index] if self.is_defined() else None

    @property
    def frames(self) -> tuple[Frame, ...]:
        """Snapshot of the stored keyframes in order."""
        return tuple(self._frames)

    # Cursor primitives

    def advance(self) -> None:
        """Move the cursor to the next frame without rendering it.

        Raises:
            PreconditionViolation: If there is no next frame
        """
        if not self.is_defined() or self._index >= len(self._frames) - 1:
            raise PreconditionViolation("Cannot advance past the last frame")
        self._index += 1
        print(f"Advancing to frame {self._index}")

    def regress(self) -> None:
        """Move the cursor to the previous frame without rendering it.

        Raises:
            PreconditionViolation: If there is no previous frame
        """
        if not self.is_defined() or self._index == 0:
            raise PreconditionViolation("Cannot regress before the first frame")
        self._index -= 1
        print(f"Regressing to frame {self._index}")

    def go_to_beginning(self) -> None:
        """Set the cursor to the first frame and render it."""
        self._index = 0
        self.show_current_frame()

    # Mutation

    def show_current_frame(self) -> None:
        """Render the current frame in the scene."""
        if self.is_defined() and self.scene is not None:
            self.scene.render_pose(self._frames[self._index])

    def advance_current_frame(self) -> None:
        """Step the current frame forward; no-op on the last frame."""
        if self.is_defined() and self._index < len(self._frames) - 1:
            self.advance()
            self.show_current_frame()

    def regress_current_frame(self) -> None:
        """Step the current frame backwards; no-op on the first frame."""
        if self.is_defined() and self._index > 0:
            self.regress()
            self.show_current_frame()

    def replace_current_frame(self, captured: Frame | None = None) -> None:
        """Overwrite the current frame, or create the first one if undefined.

        Args:
            captured: New pose; captured from the scene when omitted
        """
        if not self.is_defined():
            self.insert_after_current(captured)
            return
        self._frames[self._index] = self._capture(captured)
        self.show_current_frame()

    def delete_current_frame(self) -> None:
        """Delete the current frame.

        The frame before the deleted one becomes current, or the frame after
        it when the first frame was deleted. Deleting the only frame leaves
        the timeline undefined.
        """
        if not self.is_defined():
            return

        deleted = self._index
        del self._frames[deleted]
        self._index = 0 if deleted == 0 else deleted - 1
        print(f"Deleted frame {deleted}")

        if self.is_defined():
            self.show_current_frame()

    def insert_after_current(self, captured: Frame | None = None) -> None:
        """Insert a frame right after the current one and make it current.

        Args:
            captured: New pose; captured from the scene when omitted
        """
        frame = self._capture(captured)
        if self.is_defined():
            self._index += 1
            self._frames.insert(self._index, frame)
        else:
            self._frames = [frame]
            self._index = 0

        print(f"Adding new frame ({self._index})")
        self.show_current_frame()

    # Interpolation

    def interpolate(self, alpha: float) -> Frame:
        """Render the pose ``alpha`` of the way from the current to the next frame.

        The spline uses the frames at ``i - 1`` to ``i + 2`` around the
        cursor ``i``, so the current frame needs one predecessor and two
        successors. The cursor does not move.

        Args:
            alpha: 0 shows the current frame, 1 shows the next frame

        Returns:
            The interpolated frame

        Raises:
            PreconditionViolation: If the four control frames do not exist or
                alpha is outside [0, 1]
        """
        if not self.can_animate() or self._index < 1:
            raise PreconditionViolation(
                f"Cannot interpolate at frame {self._index} of {len(self._frames)}: "
                "need one frame before and two after"
            )
        if not 0.0 <= alpha <= 1.0:
            raise PreconditionViolation(f"alpha must be in [0, 1], got {alpha}")

        i = self._index
        prev_frame, first_frame, second_frame, after_frame = self._frames[i - 1 : i + 3]
        frame = Frame.interpolate(
            prev_frame, first_frame, second_frame, after_frame, alpha
        )
        if self.scene is not None:
            self.scene.render_pose(frame)
        return frame

    def _capture(self, captured: Frame | None) -> Frame:
        if captured is not None:
            return captured
        if self.scene is None:
            raise PreconditionViolation("No frame given and no scene to capture from")
        return self.scene.capture_pose()
