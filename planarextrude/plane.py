"""
Plane module - an origin and an orthonormal basis whose Z axis is the normal.
"""

from typing import Any, Dict, Optional

import numpy as np

from .cad_types import Vector, VectorLike
from .constants import WORLD_UP, ZERO_TOLERANCE


class Plane:
    """
    A plane described by an origin and an orthonormal (x_dir, y_dir, z_dir) frame.

    Planes are fitted to curves once per extrusion and are not persisted.
    """

    def __init__(
        self,
        origin: VectorLike = (0, 0, 0),
        x_dir: VectorLike = (1, 0, 0),
        y_dir: Optional[VectorLike] = None,
        z_dir: VectorLike = (0, 0, 1),
    ):
        z = Vector.of(z_dir).normalize()
        # Project x_dir onto the plane so the frame stays orthonormal
        x = Vector.of(x_dir)
        x = Vector(*(x - z * x.dot(z)))
        if x.length() <= ZERO_TOLERANCE:
            x = _any_perpendicular(z)
        x = x.normalize()
        y = z.cross(x).normalize() if y_dir is None else Vector.of(y_dir).normalize()

        self.origin = Vector.of(origin)
        self.x_dir = x
        self.y_dir = y
        self.z_dir = z

    @classmethod
    def world_xy(cls, origin: VectorLike = (0, 0, 0)) -> "Plane":
        return cls(origin, (1, 0, 0), (0, 1, 0), (0, 0, 1))

    @classmethod
    def world_xz(cls, origin: VectorLike = (0, 0, 0)) -> "Plane":
        return cls(origin, (1, 0, 0), (0, 0, 1), (0, -1, 0))

    @classmethod
    def world_yz(cls, origin: VectorLike = (0, 0, 0)) -> "Plane":
        return cls(origin, (0, 1, 0), (0, 0, 1), (1, 0, 0))

    @classmethod
    def from_origin_normal(cls, origin: VectorLike, normal: VectorLike) -> "Plane":
        """Create a plane from an origin and a normal, choosing any in-plane X axis.

        Args:
            origin: Origin point of the plane
            normal: Normal vector (z-axis direction)

        Returns:
            New plane with the specified origin and normal
        """
        normal_vec = Vector.of(normal).normalize()
        return cls(origin, _any_perpendicular(normal_vec), None, normal_vec)

    @classmethod
    def containing_line(cls, origin: VectorLike, direction: VectorLike) -> "Plane":
        """Create a plane through a line, with the normal as close to world up as possible.

        A vertical line gets an arbitrary normal perpendicular to it.
        """
        x = Vector.of(direction).normalize()
        up = Vector.of(WORLD_UP)
        normal = Vector(*(up - x * up.dot(x)))
        if normal.length() <= ZERO_TOLERANCE:
            normal = _any_perpendicular(x)
        return cls(origin, x, None, normal)

    @property
    def normal(self) -> Vector:
        """Get the normal vector of the plane (z_dir)."""
        return self.z_dir

    def flipped(self) -> "Plane":
        """Return the plane with its normal reversed, keeping a right-handed frame."""
        return Plane(self.origin, self.y_dir, self.x_dir, -self.z_dir)

    def translated(self, offset: VectorLike) -> "Plane":
        new_origin = Vector(*(self.origin + Vector.of(offset)))
        return Plane(new_origin, self.x_dir, self.y_dir, self.z_dir)

    def distance_to(self, point: VectorLike) -> float:
        """Signed distance from the plane to a point, positive on the normal side."""
        return Vector(*(Vector.of(point) - self.origin)).dot(self.z_dir)

    def to_world(self, u: float, v: float) -> Vector:
        """Map plane coordinates (u, v) to a world point."""
        return Vector(*(self.origin + self.x_dir * u + self.y_dir * v))

    def to_json(self) -> Dict[str, Any]:
        return {
            "origin": self.origin.to_json(),
            "x_dir": self.x_dir.to_json(),
            "y_dir": self.y_dir.to_json(),
            "z_dir": self.z_dir.to_json(),
        }

    @staticmethod
    def from_json(json_data: Dict[str, Any]) -> "Plane":
        return Plane(
            Vector.from_json(json_data["origin"]),
            Vector.from_json(json_data["x_dir"]),
            Vector.from_json(json_data["y_dir"]),
            Vector.from_json(json_data["z_dir"]),
        )

    def __repr__(self) -> str:
        return (
            f"Plane(origin={self.origin.to_tuple()}, "
            f"normal={self.z_dir.to_tuple()})"
        )


def _any_perpendicular(normal: Vector) -> Vector:
    # Cross with the world axis least aligned with the normal
    axis = np.zeros(3)
    axis[int(np.argmin(np.abs(np.asarray(normal))))] = 1.0
    return normal.cross(axis).normalize()
