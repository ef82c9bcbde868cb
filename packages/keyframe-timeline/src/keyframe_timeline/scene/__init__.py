# SPDX-License-Identifier: MIT
"""Scene graph and rigid transforms for keyframe poses."""

from .blender_scene import BlenderScene
from .scene_graph import (
    Scene,
    SceneGraph,
    SceneNode,
)
from .transforms import (
    RigidTransform,
    compose,
    slerp,
)

__all__ = [
    "BlenderScene",
    "RigidTransform",
    "Scene",
    "SceneGraph",
    "SceneNode",
    "compose",
    "slerp",
]
