# SPDX-License-Identifier: MIT
"""Scene graph that keyframes are captured from and rendered to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Protocol

from keyframe_timeline.scene.transforms import RigidTransform, compose

if TYPE_CHECKING:
    from keyframe_timeline.frame import Frame


class Scene(Protocol):
    """Anything a timeline can capture poses from and render poses to."""

    def capture_pose(self) -> Frame:
        """Snapshot the live scene into a Frame."""
        ...

    def render_pose(self, frame: Frame) -> None:
        """Push a Frame into the live scene for display."""
        ...

    def __len__(self) -> int:
        """Return the number of transforms in a captured Frame."""
        ...


@dataclass
class SceneNode:
    """A node in the scene graph."""

    path: str
    name: str
    transform: RigidTransform = field(default_factory=RigidTransform.identity)
    children: dict[str, SceneNode] = field(default_factory=dict)
    parent: SceneNode | None = None

    def get_world_transform(self) -> RigidTransform:
        """Get the world transform by combining all parent transforms.

        Returns:
            Transform in world space
        """
        # Collect transforms from root to this node
        transforms = []
        node = self
        while node is not None:
            transforms.append(node.transform)
            node = node.parent

        # Combine from root (last) to leaf (first)
        transforms.reverse()

        world_transform = transforms[0]
        for t in transforms[1:]:
            world_transform = compose(world_transform, t)

        return world_transform


class SceneGraph:
    """In-memory scene of named nodes with local rigid transforms.

    Poses are captured in depth-first order with children in insertion order.
    The root node carries no pose of its own.
    """

    def __init__(self, paths: list[str] | None = None):
        """Initialize scene graph.

        Args:
            paths: Node paths to create up front, e.g. ``/robot/arm``
        """
        self.root = SceneNode(path="/", name="root")
        self._nodes: dict[str, SceneNode] = {"/": self.root}
        for path in paths or []:
            self.get_or_create_node(path)

    def get_node(self, path: str) -> SceneNode:
        """Look up an existing node, raising KeyError if absent."""
        return self._nodes[self._normalize(path)]

    def get_or_create_node(self, path: str) -> SceneNode:
        """Get existing node or create node hierarchy for path."""
        path = self._normalize(path)
        if path in self._nodes:
            return self._nodes[path]

        # Create parent nodes as needed
        parts = path.strip("/").split("/")
        current_path = ""
        parent = self.root

        for part in parts:
            current_path = f"{current_path}/{part}"
            if current_path not in self._nodes:
                node = SceneNode(
                    path=current_path,
                    name=part,
                    parent=parent,
                )
                parent.children[part] = node
                self._nodes[current_path] = node
            parent = self._nodes[current_path]

        return parent

    def set_transform(self, path: str, transform: RigidTransform) -> None:
        """Replace the local transform of a node, creating it if needed."""
        self.get_or_create_node(path).transform = transform

    def iter_nodes(self) -> Iterator[SceneNode]:
        """Iterate over posed nodes in capture order."""
        stack = list(reversed(self.root.children.values()))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children.values()))

    def capture_pose(self) -> Frame:
        """Snapshot every node transform into a Frame."""
        from keyframe_timeline.frame import Frame

        return Frame(transforms=tuple(node.transform for node in self.iter_nodes()))

    def render_pose(self, frame: Frame) -> None:
        """Write a Frame's transforms back onto the nodes."""
        nodes = list(self.iter_nodes())
        if len(frame) != len(nodes):
            raise ValueError(
                f"Frame has {len(frame)} transforms but the scene has "
                f"{len(nodes)} nodes"
            )
        for node, transform in zip(nodes, frame.transforms):
            node.transform = transform

    def __len__(self) -> int:
        """Return number of posed nodes."""
        return len(self._nodes) - 1

    @staticmethod
    def _normalize(path: str) -> str:
        stripped = path.strip("/")
        return f"/{stripped}" if stripped else "/"
