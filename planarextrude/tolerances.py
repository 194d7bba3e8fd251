import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import DEFAULT_ABSOLUTE_TOLERANCE, DEFAULT_ANGLE_TOLERANCE


@dataclass(frozen=True)
class Tolerances:
    """
    Linear and angular tolerances of a document.

    Attributes:
        absolute: Model absolute tolerance, in model units
        angle: Model angle tolerance, in radians
    """

    absolute: float = DEFAULT_ABSOLUTE_TOLERANCE
    angle: float = DEFAULT_ANGLE_TOLERANCE

    def __post_init__(self):
        if not self.absolute > 0:
            raise ValueError(f"Absolute tolerance must be positive, got {self.absolute}")
        if not self.angle > 0:
            raise ValueError(f"Angle tolerance must be positive, got {self.angle}")

    @classmethod
    def from_degrees(
        cls, absolute: float = DEFAULT_ABSOLUTE_TOLERANCE, angle_degrees: float = 1.0
    ) -> "Tolerances":
        return cls(absolute=absolute, angle=math.radians(angle_degrees))

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle)

    def replace(
        self, absolute: Optional[float] = None, angle: Optional[float] = None
    ) -> "Tolerances":
        """Return a copy with the given values replaced."""
        return Tolerances(
            absolute=self.absolute if absolute is None else absolute,
            angle=self.angle if angle is None else angle,
        )

    def to_json(self) -> Dict[str, Any]:
        return {"absolute": self.absolute, "angle": self.angle}

    @staticmethod
    def from_json(json_data: Dict[str, Any]) -> "Tolerances":
        return Tolerances(absolute=json_data["absolute"], angle=json_data["angle"])
