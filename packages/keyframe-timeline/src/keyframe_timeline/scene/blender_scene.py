# SPDX-License-Identifier: MIT
"""Scene adapter that captures and renders poses of Blender objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from keyframe_timeline.scene.transforms import (
    RigidTransform,
    quaternion_from_blender,
    quaternion_to_blender,
)

if TYPE_CHECKING:
    from keyframe_timeline.frame import Frame


class BlenderScene:
    """Encapsulates the posed objects of the running Blender session.

    bpy is imported on first use so the rest of the package works outside
    Blender.
    """

    def __init__(self, object_names: list[str]):
        self._object_names = list(object_names)

    def _objects(self) -> list:
        import bpy

        missing = [name for name in self._object_names if name not in bpy.data.objects]
        if missing:
            raise KeyError(f"Objects not found in Blender scene: {missing}")
        return [bpy.data.objects[name] for name in self._object_names]

    def capture_pose(self) -> Frame:
        """Snapshot the location and rotation of every tracked object."""
        from keyframe_timeline.frame import Frame

        transforms = []
        for obj in self._objects():
            transforms.append(
                RigidTransform(
                    translation=tuple(float(v) for v in obj.location),
                    rotation=quaternion_from_blender(
                        tuple(float(v) for v in obj.rotation_quaternion)
                    ),
                )
            )
        return Frame(transforms=tuple(transforms))

    def render_pose(self, frame: Frame) -> None:
        """Move every tracked object to its pose in ``frame``."""
        objects = self._objects()
        if len(frame) != len(objects):
            raise ValueError(
                f"Frame has {len(frame)} transforms but {len(objects)} objects "
                "are tracked"
            )
        for obj, transform in zip(objects, frame.transforms):
            obj.rotation_mode = "QUATERNION"
            obj.location = transform.translation
            obj.rotation_quaternion = quaternion_to_blender(transform.rotation)

    def __len__(self) -> int:
        """Return number of tracked objects."""
        return len(self._object_names)
