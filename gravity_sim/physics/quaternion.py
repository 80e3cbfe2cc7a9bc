"""Unit quaternion helpers, scalar-first [w, x, y, z]."""

import numpy as np


IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


def normalize(q: np.ndarray) -> np.ndarray:
    """Return q scaled to unit length (identity for a zero quaternion)."""
    q = np.asarray(q, dtype=float)
    norm = np.linalg.norm(q)
    if norm == 0.0 or not np.isfinite(norm):
        return IDENTITY.copy()
    return q / norm


def multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product q1 * q2."""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def from_axis_angle(axis: np.ndarray, angle: float) -> np.ndarray:
    axis = np.asarray(axis, dtype=float)
    norm = np.linalg.norm(axis)
    if norm == 0.0:
        return IDENTITY.copy()
    half = 0.5 * angle
    return np.concatenate([[np.cos(half)], np.sin(half) * axis / norm])


def from_rotation_vector(rotation: np.ndarray) -> np.ndarray:
    """Quaternion for a rotation vector (axis * angle)."""
    rotation = np.asarray(rotation, dtype=float)
    angle = np.linalg.norm(rotation)
    if angle == 0.0:
        return IDENTITY.copy()
    return from_axis_angle(rotation / angle, angle)


def rotation_matrix(q: np.ndarray) -> np.ndarray:
    """Rotation matrix (body to inertial) for a unit quaternion."""
    w, x, y, z = q
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ])


def rotate(q: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Rotate body-frame vector v into the inertial frame."""
    return rotation_matrix(q) @ np.asarray(v, dtype=float)
