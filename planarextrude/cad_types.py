from typing import Sequence, Tuple, Union

import numpy as np


class Vector(np.ndarray):
    def __new__(cls, x: float, y: float, z: float = 0) -> "Vector":
        return np.asarray([float(x), float(y), float(z)]).view(cls)

    def __eq__(self, other: object) -> bool:
        # Compare plain arrays; allclose would otherwise call back into this method
        try:
            other_array = np.asarray(other, dtype=float)
        except (TypeError, ValueError):
            return False
        if other_array.shape != self.shape:
            return False
        return bool(np.allclose(np.asarray(self), other_array))

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    @classmethod
    def of(cls, value: "VectorLike") -> "Vector":
        """Coerce a tuple, list or array to a Vector."""
        if isinstance(value, Vector):
            return value
        return cls(*value)

    def normalize(self) -> "Vector":
        length = np.linalg.norm(self)
        if length == 0:
            raise ValueError("Cannot normalize a zero-length vector")
        return Vector(*(self / length))

    def length(self) -> float:
        return float(np.linalg.norm(self))

    def dot(self, other: "VectorLike") -> float:
        return float(np.dot(np.asarray(self), np.asarray(other, dtype=float)))

    def cross(self, other: "VectorLike") -> "Vector":
        return Vector(*np.cross(np.asarray(self), np.asarray(other, dtype=float)))

    @property
    def x(self) -> float:
        return float(self[0])

    @property
    def y(self) -> float:
        return float(self[1])

    @property
    def z(self) -> float:
        return float(self[2])

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_json(self):
        return {
            "x": float(self.x),
            "y": float(self.y),
            "z": float(self.z),
        }

    @staticmethod
    def from_json(json_data):
        return Vector(json_data["x"], json_data["y"], json_data["z"])


VectorLike = Union[Tuple[float, float], Tuple[float, float, float], Sequence[float], Vector]
