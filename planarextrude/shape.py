from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

if TYPE_CHECKING:
    from planarextrude.app import App


class BrepSolidOrientation(Enum):
    """Orientation of a closed brep's face normals."""

    NONE = "none"  # not a closed solid
    OUTWARD = "outward"
    INWARD = "inward"
    UNKNOWN = "unknown"


class Brep(ABC):
    def __init__(self, obj, app: Optional["App"] = None) -> None:
        self.obj = obj
        self.app = app
        if app is not None:
            app.register_shape(self)

    # ========== Topology queries ==========

    @abstractmethod
    def face_count(self) -> int: ...

    @property
    @abstractmethod
    def is_solid(self) -> bool: ...

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """True when every edge is shared by exactly two faces."""
        ...

    @property
    @abstractmethod
    def solid_orientation(self) -> BrepSolidOrientation: ...

    @abstractmethod
    def vertices(self) -> np.ndarray:
        """Return the brep vertices as an (n, 3) array."""
        ...

    @abstractmethod
    def bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (min_corner, max_corner) of the brep."""
        ...

    @abstractmethod
    def volume(self) -> float: ...

    @abstractmethod
    def area(self) -> float: ...

    # ========== Editing ==========

    @abstractmethod
    def split_kinky_faces(self, angle_tolerance: float, tolerance: float) -> "Brep":
        """
        Split faces along tangency kinks.

        Args:
            angle_tolerance: Angle in radians below which a crease is not a kink
            tolerance: Linear tolerance used while splitting

        Returns:
            Brep whose faces are free of interior kinks
        """
        ...

    @abstractmethod
    def cap_planar_holes(self, tolerance: float) -> Optional["Brep"]:
        """
        Close planar openings with flat faces.

        Returns:
            The capped brep, or None when no closed brep could be made
        """
        ...

    @abstractmethod
    def flip(self) -> "Brep":
        """Reverse all face normals in place and return self."""
        ...

    # ========== Export ==========

    @abstractmethod
    def to_stl(self, file_name: str) -> None:
        pass

    @abstractmethod
    def to_step(self, file_name: str) -> None:
        pass

    def extent_along(self, direction) -> float:
        """Length of the brep's vertex projection onto ``direction``."""
        d = np.asarray(direction, dtype=float)
        d = d / np.linalg.norm(d)
        projected = self.vertices() @ d
        return float(projected.max() - projected.min())
