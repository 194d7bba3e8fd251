"""
planarextrude - Extrude planar curves into shells and solids.

This package provides the PlanarExtrude operation on top of OpenCASCADE,
together with a thin host adapter that reports errors as runtime messages.
"""

__version__ = "0.1.0"

from .app import App
from .cad_types import Vector
from .component import ExtrudePlanarComponent, RuntimeMessage, RuntimeMessageLevel
from .constants import ZERO_TOLERANCE
from .errors import (
    ExtrusionFailedError,
    InvalidInputError,
    NotPlanarError,
    PlanarExtrudeError,
)
from .extrude import ExtrudeParameters, extrude_planar_curve, extrude_with_parameters
from .plane import Plane
from .shape import Brep, BrepSolidOrientation
from .tolerances import Tolerances

# The OpenCASCADE integration needs the OCP bindings
try:
    from .integrations.ocp.app import OpenCascadeOcpApp
    from .integrations.ocp.curve import OcpCurve
    from .integrations.ocp.shape import OcpBrep
except ImportError as e:
    import warnings

    warnings.warn(f"OpenCASCADE integration could not be imported: {e}")

__all__ = [
    # Core operation
    "extrude_planar_curve",
    "extrude_with_parameters",
    "ExtrudeParameters",
    # Host adapter
    "App",
    "ExtrudePlanarComponent",
    "RuntimeMessage",
    "RuntimeMessageLevel",
    # Geometry types
    "Vector",
    "Plane",
    "Brep",
    "BrepSolidOrientation",
    "Tolerances",
    "ZERO_TOLERANCE",
    # Errors
    "PlanarExtrudeError",
    "NotPlanarError",
    "InvalidInputError",
    "ExtrusionFailedError",
    # OpenCASCADE integration
    "OpenCascadeOcpApp",
    "OcpCurve",
    "OcpBrep",
]
