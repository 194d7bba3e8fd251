from typing import Optional, Sequence

from planarextrude.app import App
from planarextrude.cad_types import VectorLike
from planarextrude.integrations.ocp.curve import OcpCurve
from planarextrude.plane import Plane
from planarextrude.tolerances import Tolerances


class OpenCascadeOcpApp(App):
    def __init__(self, tolerances: Optional[Tolerances] = None):
        super().__init__(tolerances)

    def polyline(self, points: Sequence[VectorLike], closed: bool = False) -> OcpCurve:
        return OcpCurve.polyline(points, closed=closed, app=self)

    def rectangle(
        self,
        width: float,
        height: float,
        plane: Optional[Plane] = None,
        centered: bool = True,
    ) -> OcpCurve:
        return OcpCurve.rectangle(width, height, plane=plane, centered=centered, app=self)

    def circle(self, radius: float, plane: Optional[Plane] = None) -> OcpCurve:
        return OcpCurve.circle(radius, plane=plane, app=self)
