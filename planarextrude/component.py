"""
Host adapter for planar extrusion.

``ExtrudePlanarComponent`` is the node-editor facing side of
``extrude_planar_curve``: it reads its inputs with defaults, pulls the
document tolerances at the start of every solve, and turns reportable errors
into runtime messages instead of letting them propagate to the host.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

from planarextrude.app import App
from planarextrude.constants import DEFAULT_DISTANCE
from planarextrude.curve import Curve
from planarextrude.errors import (
    ExtrusionFailedError,
    InvalidInputError,
    NotPlanarError,
)
from planarextrude.extrude import ExtrudeParameters, extrude_with_parameters, fit_plane
from planarextrude.shape import Brep

logger = logging.getLogger(__name__)

_MISSING = object()


class RuntimeMessageLevel(Enum):
    REMARK = "remark"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class RuntimeMessage:
    level: RuntimeMessageLevel
    text: str


_LOG_LEVELS = {
    RuntimeMessageLevel.REMARK: logging.INFO,
    RuntimeMessageLevel.WARNING: logging.WARNING,
    RuntimeMessageLevel.ERROR: logging.ERROR,
}


class ExtrudePlanarComponent:
    """
    Extrudes planar curves a specified distance.

    Inputs (by key): ``curve``, ``distance`` (1.0), ``both_sides`` (False),
    ``solid`` (False), ``up`` (False). A key that is present with a ``None``
    value counts as a failed read and ends the solve silently.
    """

    defaults = {
        "distance": DEFAULT_DISTANCE,
        "both_sides": False,
        "solid": False,
        "up": False,
    }

    def __init__(self, app: App):
        self.app = app
        self.output: Optional[Brep] = None
        self._messages: List[RuntimeMessage] = []

    # ========== Runtime messages ==========

    def add_runtime_message(self, level: RuntimeMessageLevel, text: str) -> None:
        self._messages.append(RuntimeMessage(level, text))
        logger.log(_LOG_LEVELS[level], text)

    def clear_runtime_messages(self) -> None:
        self._messages = []

    @property
    def runtime_messages(self) -> List[RuntimeMessage]:
        return list(self._messages)

    # ========== Solving ==========

    def _get_data(self, inputs: Mapping[str, Any], key: str) -> Any:
        value = inputs.get(key, self.defaults.get(key, _MISSING))
        return _MISSING if value is None else value

    def solve_instance(self, inputs: Mapping[str, Any]) -> Optional[Brep]:
        """
        Run one extrusion.

        Args:
            inputs: Mapping of input name to value

        Returns:
            The extruded brep, or None when the solve produced no output
        """
        self.clear_runtime_messages()
        self.output = None

        # Tolerances are document state and may change between solves
        tolerances = self.app.tolerances

        curve = self._get_data(inputs, "curve")
        if curve is _MISSING:
            return None
        if not isinstance(curve, Curve):
            self.add_runtime_message(
                RuntimeMessageLevel.ERROR,
                f"Expected a curve, got {type(curve).__name__}",
            )
            return None

        # Planarity is reported whatever the other inputs hold
        try:
            plane = fit_plane(curve, tolerances)
        except NotPlanarError as e:
            self.add_runtime_message(RuntimeMessageLevel.ERROR, str(e))
            return None

        values = {}
        for key in ("distance", "both_sides", "solid", "up"):
            value = self._get_data(inputs, key)
            if value is _MISSING:
                logger.debug(f"Input '{key}' could not be read")
                return None
            values[key] = value

        try:
            distance = float(values["distance"])
        except (TypeError, ValueError):
            logger.debug(f"Distance {values['distance']!r} is not a number")
            return None

        params = ExtrudeParameters(
            distance=distance,
            both_sides=bool(values["both_sides"]),
            solid=bool(values["solid"]),
            up=bool(values["up"]),
        )
        logger.debug(f"Solving with {params.to_json()}")

        try:
            brep = extrude_with_parameters(curve, params, tolerances, plane=plane)
        except ExtrusionFailedError as e:
            self.add_runtime_message(RuntimeMessageLevel.ERROR, str(e))
            return None
        except InvalidInputError as e:
            # Invalid distances end the solve without a message
            logger.debug(f"Solve skipped: {e}")
            return None

        self.app.register_shape(brep)
        self.output = brep
        return brep
