# SPDX-License-Identifier: MIT
"""Rigid transform and quaternion utilities for keyframe poses."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]  # (x, y, z, w)

IDENTITY_QUATERNION: Quaternion = (0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class RigidTransform:
    """Translation plus rotation of a single scene node."""

    translation: Vector3
    rotation: Quaternion  # Quaternion (x, y, z, w)

    @classmethod
    def identity(cls) -> RigidTransform:
        """Create an identity transform."""
        return cls(translation=(0.0, 0.0, 0.0), rotation=IDENTITY_QUATERNION)


def _as_vector(values: np.ndarray) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def quaternion_multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """Multiply two quaternions (x, y, z, w format).

    Args:
        q1: First quaternion
        q2: Second quaternion

    Returns:
        Product quaternion
    """
    x1, y1, z1, w1 = q1
    x2, y2, z2, w2 = q2

    return (
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
    )


def quaternion_normalize(q: Quaternion) -> Quaternion:
    """Scale a quaternion to unit length."""
    norm = np.linalg.norm(q)
    if norm < 1e-12:
        raise ValueError("Cannot normalize a zero quaternion")
    return _as_vector(np.asarray(q, dtype=np.float64) / norm)


def quaternion_inverse(q: Quaternion) -> Quaternion:
    """Invert a quaternion."""
    x, y, z, w = q
    norm_sq = x * x + y * y + z * z + w * w
    if norm_sq < 1e-24:
        raise ValueError("Cannot invert a zero quaternion")
    return (-x / norm_sq, -y / norm_sq, -z / norm_sq, w / norm_sq)


def conditional_negate(q: Quaternion) -> Quaternion:
    """Return the representative of ``q`` with a non-negative w.

    ``q`` and ``-q`` are the same rotation; picking w >= 0 makes powers and
    slerps take the short way around.
    """
    if q[3] < 0:
        return (-q[0], -q[1], -q[2], -q[3])
    return q


def quaternion_power(q: Quaternion, alpha: float) -> Quaternion:
    """Raise a unit quaternion to a real power.

    The result rotates about the same axis by ``alpha`` times the angle.
    """
    x, y, z, w = q
    sin_half = math.sqrt(x * x + y * y + z * z)
    if sin_half < 1e-12:
        return IDENTITY_QUATERNION
    half_angle = math.atan2(sin_half, w)
    scaled = alpha * half_angle
    factor = math.sin(scaled) / sin_half
    return (x * factor, y * factor, z * factor, math.cos(scaled))


def slerp(q0: Quaternion, q1: Quaternion, alpha: float) -> Quaternion:
    """Spherical linear interpolation from ``q0`` (alpha 0) to ``q1`` (alpha 1)."""
    delta = conditional_negate(quaternion_multiply(q1, quaternion_inverse(q0)))
    return quaternion_multiply(quaternion_power(delta, alpha), q0)


def lerp(v0: Vector3, v1: Vector3, alpha: float) -> Vector3:
    """Linear interpolation between two vectors."""
    a = np.asarray(v0, dtype=np.float64)
    b = np.asarray(v1, dtype=np.float64)
    return _as_vector(a + (b - a) * alpha)


def rotate_vector(q: Quaternion, v: Vector3) -> Vector3:
    """Rotate a vector by a unit quaternion."""
    rotated = quaternion_multiply(
        quaternion_multiply(q, (v[0], v[1], v[2], 0.0)), quaternion_inverse(q)
    )
    return (rotated[0], rotated[1], rotated[2])


def compose(parent: RigidTransform, child: RigidTransform) -> RigidTransform:
    """Combine parent and child transforms into a single world transform.

    Args:
        parent: Parent transform (already in world space)
        child: Child transform (local to parent)

    Returns:
        Combined transform in world space
    """
    offset = rotate_vector(parent.rotation, child.translation)
    translation = _as_vector(np.add(parent.translation, offset))
    rotation = quaternion_normalize(
        quaternion_multiply(parent.rotation, child.rotation)
    )
    return RigidTransform(translation=translation, rotation=rotation)


def quaternion_to_blender(quat: Quaternion) -> tuple[float, float, float, float]:
    """Convert quaternion from (x,y,z,w) to Blender (w,x,y,z)."""
    x, y, z, w = quat
    return (w, x, y, z)


def quaternion_from_blender(quat: tuple[float, float, float, float]) -> Quaternion:
    """Convert quaternion from Blender (w,x,y,z) to (x,y,z,w)."""
    w, x, y, z = quat
    return (x, y, z, w)


def catmull_rom_translation(
    c0: Vector3, c1: Vector3, c2: Vector3, c3: Vector3
) -> tuple[Vector3, Vector3]:
    """Inner Bezier control points of the segment from ``c1`` to ``c2``."""
    p0, p1, p2, p3 = (np.asarray(c, dtype=np.float64) for c in (c0, c1, c2, c3))
    d = (p2 - p0) / 6.0 + p1
    e = -(p3 - p1) / 6.0 + p2
    return _as_vector(d), _as_vector(e)


def catmull_rom_rotation(
    q0: Quaternion, q1: Quaternion, q2: Quaternion, q3: Quaternion
) -> tuple[Quaternion, Quaternion]:
    """Inner Bezier control rotations of the segment from ``q1`` to ``q2``."""
    d_delta = conditional_negate(quaternion_multiply(q2, quaternion_inverse(q0)))
    e_delta = conditional_negate(quaternion_multiply(q3, quaternion_inverse(q1)))
    d = quaternion_multiply(quaternion_power(d_delta, 1.0 / 6.0), q1)
    e = quaternion_multiply(quaternion_power(e_delta, -1.0 / 6.0), q2)
    return quaternion_normalize(d), quaternion_normalize(e)


def bezier_translation(
    c1: Vector3, d: Vector3, e: Vector3, c2: Vector3, alpha: float
) -> Vector3:
    """Evaluate a cubic Bezier curve by de Casteljau's construction."""
    f = lerp(c1, d, alpha)
    g = lerp(d, e, alpha)
    h = lerp(e, c2, alpha)
    return lerp(lerp(f, g, alpha), lerp(g, h, alpha), alpha)


def bezier_rotation(
    q1: Quaternion, d: Quaternion, e: Quaternion, q2: Quaternion, alpha: float
) -> Quaternion:
    """De Casteljau's construction with slerp in place of lerp."""
    f = slerp(q1, d, alpha)
    g = slerp(d, e, alpha)
    h = slerp(e, q2, alpha)
    return quaternion_normalize(slerp(slerp(f, g, alpha), slerp(g, h, alpha), alpha))
