"""
Pose model for tracked targets.

Poses are stored as plain float tuples so they stay hashable and comparable;
numpy is used for the matrix decomposition backends hand us.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple, Union

import numpy as np

Vec3 = Tuple[float, float, float]
Quat = Tuple[float, float, float, float]


def _quat_from_rotation_matrix(r: np.ndarray) -> Quat:
    """Convert a 3x3 rotation matrix to an (x, y, z, w) quaternion."""
    trace = r[0, 0] + r[1, 1] + r[2, 2]
    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (r[2, 1] - r[1, 2]) * s
        y = (r[0, 2] - r[2, 0]) * s
        z = (r[1, 0] - r[0, 1]) * s
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = 2.0 * np.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2])
        w = (r[2, 1] - r[1, 2]) / s
        x = 0.25 * s
        y = (r[0, 1] + r[1, 0]) / s
        z = (r[0, 2] + r[2, 0]) / s
    elif r[1, 1] > r[2, 2]:
        s = 2.0 * np.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2])
        w = (r[0, 2] - r[2, 0]) / s
        x = (r[0, 1] + r[1, 0]) / s
        y = 0.25 * s
        z = (r[1, 2] + r[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1])
        w = (r[1, 0] - r[0, 1]) / s
        x = (r[0, 2] + r[2, 0]) / s
        y = (r[1, 2] + r[2, 1]) / s
        z = 0.25 * s
    q = np.array([x, y, z, w], dtype=float)
    q /= np.linalg.norm(q)
    return tuple(float(v) for v in q)  # type: ignore[return-value]


@dataclass(frozen=True)
class Pose:
    """
    Position, orientation and scale of a target in world space.

    Attributes:
        position: (x, y, z) translation.
        rotation: (x, y, z, w) unit quaternion.
        scale: (x, y, z) scale factors.
    """
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = (0.0, 0.0, 0.0, 1.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    @classmethod
    def identity(cls) -> "Pose":
        return cls()

    @classmethod
    def hidden(cls, position: Vec3 = (0.0, 0.0, 0.0)) -> "Pose":
        """Zero-scale pose used to hide content attached to a lost target."""
        return cls(position=position, scale=(0.0, 0.0, 0.0))

    @property
    def is_hidden(self) -> bool:
        return all(s == 0.0 for s in self.scale)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Pose":
        """
        Adapter: build a Pose from an SDK-style payload.

        Accepts `{"position": {"x","y","z"}, "rotation": {"x","y","z","w"},
        "scale": float | {"x","y","z"}}`; missing parts fall back to identity.
        """
        p = d.get("position") or {}
        r = d.get("rotation") or {}
        s = d.get("scale", 1.0)
        position = (float(p.get("x", 0.0)), float(p.get("y", 0.0)), float(p.get("z", 0.0)))
        rotation = (
            float(r.get("x", 0.0)),
            float(r.get("y", 0.0)),
            float(r.get("z", 0.0)),
            float(r.get("w", 1.0)),
        )
        if isinstance(s, dict):
            scale = (float(s.get("x", 1.0)), float(s.get("y", 1.0)), float(s.get("z", 1.0)))
        else:
            scale = (float(s), float(s), float(s))
        return cls(position=position, rotation=rotation, scale=scale)

    @classmethod
    def from_matrix(
        cls,
        matrix: Union[Sequence[float], np.ndarray],
        column_major: bool = True,
    ) -> "Pose":
        """
        Decompose a 4x4 affine transform into translation, rotation and scale.

        Args:
            matrix: 16 floats or a 4x4 array.
            column_major: Flat input is column-major (WebGL convention).
        """
        m = np.asarray(matrix, dtype=float)
        if m.shape == (16,):
            m = m.reshape(4, 4)
            if column_major:
                m = m.T
        if m.shape != (4, 4):
            raise ValueError(f"Expected a 4x4 matrix, got shape {m.shape}")

        translation = m[:3, 3]
        linear = m[:3, :3]
        scale = np.linalg.norm(linear, axis=0)
        if np.linalg.det(linear) < 0:
            scale[0] = -scale[0]
        if np.any(scale == 0):
            return cls(position=tuple(float(v) for v in translation), scale=(0.0, 0.0, 0.0))  # type: ignore[arg-type]

        rotation = _quat_from_rotation_matrix(linear / scale)
        return cls(
            position=tuple(float(v) for v in translation),  # type: ignore[arg-type]
            rotation=rotation,
            scale=tuple(float(v) for v in scale),  # type: ignore[arg-type]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position),
            "rotation": list(self.rotation),
            "scale": list(self.scale),
        }
