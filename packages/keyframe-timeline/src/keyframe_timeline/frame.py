# SPDX-License-Identifier: MIT
"""Keyframe pose snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from keyframe_timeline.errors import DecodeError
from keyframe_timeline.scene.transforms import (
    RigidTransform,
    bezier_rotation,
    bezier_translation,
    catmull_rom_rotation,
    catmull_rom_translation,
)

# Floats per serialized transform: tx ty tz qx qy qz qw
FIELDS_PER_TRANSFORM = 7


@dataclass(frozen=True)
class Frame:
    """One saved pose: a rigid transform for every node of the scene."""

    transforms: tuple[RigidTransform, ...] = ()

    def __len__(self) -> int:
        """Return number of node transforms."""
        return len(self.transforms)

    def serialize(self) -> str:
        """Encode the frame as a single line of text."""
        values = []
        for transform in self.transforms:
            values.extend(transform.translation)
            values.extend(transform.rotation)
        return " ".join(repr(float(v)) for v in values)

    @classmethod
    def deserialize(
        cls,
        line: str,
        expected_size: int | None = None,
        line_number: int | None = None,
    ) -> Frame:
        """Decode a line produced by :meth:`serialize`.

        Args:
            line: Serialized frame, without the line separator
            expected_size: Number of transforms the frame must hold, if known
            line_number: Position of the line in its source, for error messages

        Returns:
            Decoded Frame

        Raises:
            DecodeError: If the line is not a valid serialized frame
        """
        tokens = line.split()
        try:
            values = [float(token) for token in tokens]
        except ValueError:
            raise DecodeError(
                "Non-numeric value in keyframe", line=line, line_number=line_number
            ) from None

        if len(values) % FIELDS_PER_TRANSFORM != 0:
            raise DecodeError(
                f"Expected a multiple of {FIELDS_PER_TRANSFORM} values, "
                f"got {len(values)}",
                line=line,
                line_number=line_number,
            )

        transforms = []
        for start in range(0, len(values), FIELDS_PER_TRANSFORM):
            chunk = values[start : start + FIELDS_PER_TRANSFORM]
            transforms.append(
                RigidTransform(translation=tuple(chunk[:3]), rotation=tuple(chunk[3:]))
            )

        if expected_size is not None and len(transforms) != expected_size:
            raise DecodeError(
                f"Expected {expected_size} transforms, got {len(transforms)}",
                line=line,
                line_number=line_number,
            )

        return cls(transforms=tuple(transforms))

    @staticmethod
    def interpolate(
        prev: Frame, first: Frame, second: Frame, after: Frame, alpha: float
    ) -> Frame:
        """Blend between ``first`` (alpha 0) and ``second`` (alpha 1).

        Each node follows a Catmull-Rom spline through the four frames:
        translations are evaluated with linear de Casteljau steps, rotations
        with spherical ones.
        """
        size = len(first)
        if any(len(frame) != size for frame in (prev, second, after)):
            raise ValueError("Cannot interpolate frames of different sizes")

        transforms = []
        for t0, t1, t2, t3 in zip(
            prev.transforms, first.transforms, second.transforms, after.transforms
        ):
            d, e = catmull_rom_translation(
                t0.translation, t1.translation, t2.translation, t3.translation
            )
            qd, qe = catmull_rom_rotation(
                t0.rotation, t1.rotation, t2.rotation, t3.rotation
            )
            transforms.append(
                RigidTransform(
                    translation=bezier_translation(
                        t1.translation, d, e, t2.translation, alpha
                    ),
                    rotation=bezier_rotation(t1.rotation, qd, qe, t2.rotation, alpha),
                )
            )
        return Frame(transforms=tuple(transforms))
