"""
Curve module - the profile curves that PlanarExtrude consumes.

The extrusion algorithm only talks to the kernel through this interface, so a
concrete integration (see ``integrations.ocp.curve``) supplies the geometry.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from .cad_types import Vector, VectorLike
from .constants import CURVE_SAMPLES

if TYPE_CHECKING:
    from .plane import Plane
    from .shape import Brep
    from .app import App


class Curve(ABC):
    """
    Abstract base class for a (possibly closed) curve made of one or more edges.

    Instances are owned by the caller. Operations that change geometry act on
    a duplicate; ``translate`` is the only in-place transform.
    """

    def __init__(self, obj, app: Optional["App"] = None) -> None:
        self.obj = obj
        self.app = app

    @property
    @abstractmethod
    def is_closed(self) -> bool: ...

    @abstractmethod
    def try_get_plane(self, tolerance: float) -> Optional["Plane"]:
        """
        Fit a plane to the curve.

        Args:
            tolerance: Maximum distance of the curve from the fitted plane

        Returns:
            The fitted plane, or None if the curve is not planar within tolerance
        """
        ...

    @abstractmethod
    def duplicate(self) -> "Curve": ...

    @abstractmethod
    def translate(self, offset: VectorLike) -> "Curve":
        """Move the curve in place by ``offset`` and return it."""
        ...

    @abstractmethod
    def extrude(self, direction: VectorLike) -> Optional["Brep"]:
        """
        Sweep the curve along ``direction`` into a brep.

        Returns:
            The extruded shell, or None when the kernel produces no surface
        """
        ...

    @abstractmethod
    def points(self, samples: int = CURVE_SAMPLES) -> np.ndarray:
        """Sample ``samples`` points along the curve as an (n, 3) array."""
        ...

    @abstractmethod
    def length(self) -> float: ...

    def is_planar(self, tolerance: float) -> bool:
        return self.try_get_plane(tolerance) is not None

    def translated(self, offset: VectorLike) -> "Curve":
        """Return a moved copy, leaving this curve untouched."""
        return self.duplicate().translate(offset)

    def start_point(self) -> Vector:
        return Vector(*self.points(2)[0])

    def end_point(self) -> Vector:
        return Vector(*self.points(2)[-1])

    def to_png(
        self,
        file_name: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        margin: float = 0.1,
    ) -> None:
        """
        Render the curve, projected onto world XY, to a PNG image.

        Args:
            file_name: Path to save the PNG file. If None, displays in a UI window instead.
            width: Image width in pixels (default: 800)
            height: Image height in pixels (default: 600)
            margin: Margin around the curve as a fraction of size (default: 0.1)

        Raises:
            ImportError: If matplotlib is not installed
        """
        try:
            import matplotlib.pyplot as plt
        except ImportError:
            raise ImportError(
                "matplotlib is required for curve rendering. Install with: pip install matplotlib"
            )

        pts = self.points(CURVE_SAMPLES * 4)

        fig, ax = plt.subplots(figsize=(width / 100, height / 100), dpi=100)
        ax.set_aspect("equal")
        ax.plot(pts[:, 0], pts[:, 1], "k-", linewidth=2)

        min_x, max_x = pts[:, 0].min(), pts[:, 0].max()
        min_y, max_y = pts[:, 1].min(), pts[:, 1].max()
        x_range = max(max_x - min_x, 1)
        y_range = max(max_y - min_y, 1)
        ax.set_xlim(min_x - x_range * margin, max_x + x_range * margin)
        ax.set_ylim(min_y - y_range * margin, max_y + y_range * margin)

        ax.grid(True, alpha=0.3)
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.set_title("Curve")

        plt.tight_layout()
        if file_name:
            plt.savefig(file_name, dpi=100, bbox_inches="tight", facecolor="white")
            plt.close(fig)
        else:
            plt.show()


def newell_normal(points: np.ndarray) -> np.ndarray:
    """
    Area-weighted normal of a closed polygon (Newell's method).

    The result points to the side from which the polygon runs counter-clockwise;
    its length is twice the enclosed area. Returns a zero vector for degenerate input.
    """
    pts = np.asarray(points, dtype=float)
    if len(pts) < 3:
        return np.zeros(3)
    nxt = np.roll(pts, -1, axis=0)
    return np.array(
        [
            np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
            np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
            np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
        ]
    )
