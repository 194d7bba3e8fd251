"""
Planar curve extrusion.

``extrude_planar_curve`` sweeps a planar profile along its plane normal and,
for closed profiles, optionally caps the result into an outward-facing solid.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .curve import Curve
from .constants import DEFAULT_DISTANCE, WORLD_UP, ZERO_TOLERANCE
from .errors import ExtrusionFailedError, InvalidInputError, NotPlanarError
from .plane import Plane
from .shape import Brep, BrepSolidOrientation
from .tolerances import Tolerances

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtrudeParameters:
    distance: float = DEFAULT_DISTANCE
    both_sides: bool = False
    solid: bool = False
    up: bool = False

    def is_valid_distance(self) -> bool:
        """A distance is usable when it is finite and not zero."""
        return math.isfinite(self.distance) and abs(self.distance) >= ZERO_TOLERANCE

    def to_json(self) -> Dict[str, Any]:
        return {
            "distance": self.distance,
            "both_sides": self.both_sides,
            "solid": self.solid,
            "up": self.up,
        }

    @staticmethod
    def from_json(json: Dict[str, Any]) -> "ExtrudeParameters":
        return ExtrudeParameters(
            distance=float(json.get("distance", DEFAULT_DISTANCE)),
            both_sides=bool(json.get("both_sides", False)),
            solid=bool(json.get("solid", False)),
            up=bool(json.get("up", False)),
        )


def fit_plane(curve: Curve, tolerances: Tolerances) -> Plane:
    """Fit the curve's plane or raise NotPlanarError."""
    plane = curve.try_get_plane(tolerances.absolute)
    if plane is None:
        raise NotPlanarError()
    return plane


def extrude_planar_curve(
    curve: Curve,
    distance: float = DEFAULT_DISTANCE,
    both_sides: bool = False,
    solid: bool = False,
    up: bool = False,
    tolerances: Optional[Tolerances] = None,
) -> Brep:
    """
    Extrude a planar curve along its plane normal.

    Args:
        curve: Planar profile. It is never modified.
        distance: Signed extrusion distance along the fitted normal
        both_sides: Extrude ``distance`` to each side of the curve's plane
        solid: Cap the ends into a closed solid when the curve is closed
        up: Reverse the normal if it points below the world XY plane
        tolerances: Linear and angular tolerances; document defaults if None

    Returns:
        Brep: Closed outward solid, or an open shell split at kinks

    Raises:
        NotPlanarError: No plane fits the curve within the absolute tolerance
        InvalidInputError: ``distance`` is not finite or below ZERO_TOLERANCE
        ExtrusionFailedError: The kernel produced no surface

    Example:
        >>> square = OcpCurve.rectangle(1, 1)
        >>> box = extrude_planar_curve(square, 2.0, solid=True)
        >>> box.is_solid
        True
    """
    params = ExtrudeParameters(distance, both_sides, solid, up)
    return extrude_with_parameters(curve, params, tolerances)


def extrude_with_parameters(
    curve: Curve,
    params: ExtrudeParameters,
    tolerances: Optional[Tolerances] = None,
    plane: Optional[Plane] = None,
) -> Brep:
    """
    Run the extrusion described by ``params``.

    ``plane`` may be passed when the caller already fitted it with the same
    tolerances; otherwise it is fitted here, before the distance is checked.
    """
    tolerances = tolerances or Tolerances()

    if plane is None:
        plane = fit_plane(curve, tolerances)

    if not params.is_valid_distance():
        raise InvalidInputError(f"Extrusion distance {params.distance!r} is not usable")

    distance = params.distance
    normal = plane.z_dir.normalize()
    if params.up and plane.z_dir.dot(WORLD_UP) < -ZERO_TOLERANCE:
        normal = -normal

    # Push a copy to the far side and sweep twice the distance back across
    if params.both_sides:
        curve = curve.duplicate().translate(-normal * distance)
        distance *= 2

    logger.debug(
        f"Extruding {type(curve).__name__} along {normal.to_tuple()} by {distance}"
    )
    brep = curve.extrude(normal * distance)
    if brep is None:
        raise ExtrusionFailedError()

    # Degree-1 profiles sweep into kinked surfaces; downstream consumers expect them split
    brep = brep.split_kinky_faces(tolerances.angle, tolerances.absolute)

    if curve.is_closed and params.solid:
        capped = brep.cap_planar_holes(tolerances.absolute)
        if capped is not None:
            # Clockwise profiles give inward normals after the sweep
            if capped.solid_orientation is BrepSolidOrientation.INWARD:
                capped.flip()
            brep = capped
        else:
            logger.debug("Capping planar holes failed, keeping open shell")

    return brep
