"""
OcpCurve - OpenCASCADE implementation of Curve, backed by a TopoDS_Wire.
"""

import logging
from typing import Any, Optional, Sequence

import numpy as np
from OCP.BRep import BRep_Tool
from OCP.BRepAdaptor import BRepAdaptor_CompCurve, BRepAdaptor_Curve
from OCP.BRepBuilderAPI import (
    BRepBuilderAPI_Copy,
    BRepBuilderAPI_FindPlane,
    BRepBuilderAPI_MakeEdge,
    BRepBuilderAPI_MakePolygon,
    BRepBuilderAPI_MakeWire,
    BRepBuilderAPI_Transform,
    BRepBuilderAPI_WireError,
)
from OCP.BRepGProp import BRepGProp
from OCP.BRepPrimAPI import BRepPrimAPI_MakePrism
from OCP.BRepTools import BRepTools_WireExplorer
from OCP.Geom import Geom_BSplineCurve
from OCP.GeomAbs import GeomAbs_BSplineCurve, GeomAbs_Line
from OCP.GeomAPI import GeomAPI_Interpolate
from OCP.GProp import GProp_GProps
from OCP.TColgp import TColgp_Array1OfPnt, TColgp_HArray1OfPnt
from OCP.TColStd import TColStd_Array1OfInteger, TColStd_Array1OfReal
from OCP.TopAbs import TopAbs_EDGE, TopAbs_REVERSED
from OCP.TopExp import TopExp_Explorer
from OCP.TopoDS import TopoDS
from OCP.gp import gp_Ax2, gp_Circ, gp_Dir, gp_Pnt, gp_Trsf, gp_Vec

from planarextrude.cad_types import Vector, VectorLike
from planarextrude.constants import CURVE_SAMPLES, ZERO_TOLERANCE
from planarextrude.curve import Curve, newell_normal
from planarextrude.integrations.ocp.shape import OcpBrep
from planarextrude.plane import Plane

logger = logging.getLogger(__name__)


def _gp_pnt(point: VectorLike) -> gp_Pnt:
    p = Vector.of(point)
    return gp_Pnt(p.x, p.y, p.z)


def _gp_vec(vector: VectorLike) -> gp_Vec:
    v = Vector.of(vector)
    return gp_Vec(v.x, v.y, v.z)


def _gp_dir(vector: VectorLike) -> gp_Dir:
    v = Vector.of(vector)
    return gp_Dir(v.x, v.y, v.z)


def _vector(xyz) -> Vector:
    return Vector(xyz.X(), xyz.Y(), xyz.Z())


def _open_points(points: Sequence[VectorLike], closed: bool) -> list:
    pts = [Vector.of(p) for p in points]
    # A closed profile may repeat its start point at the end
    if closed and len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return pts


class OcpCurve(Curve):
    """
    A profile curve held as an OpenCASCADE wire.

    Polylines built with ``polyline`` have one line edge per segment, while
    ``nurbs_polyline`` produces a single degree-1 B-spline edge whose kinks
    only show up as knots.
    """

    def __init__(self, obj, app: Optional[Any] = None) -> None:
        if obj is None or obj.IsNull():
            raise ValueError("Cannot create a curve from a null wire")
        super().__init__(obj, app)

    # ========== Factories ==========

    @classmethod
    def from_wire(cls, wire, app: Optional[Any] = None) -> "OcpCurve":
        return cls(TopoDS.Wire_s(wire), app)

    @classmethod
    def from_edges(cls, edges, app: Optional[Any] = None) -> "OcpCurve":
        wire_builder = BRepBuilderAPI_MakeWire()
        for edge in edges:
            wire_builder.Add(edge)
        wire_builder.Build()

        if not wire_builder.IsDone():
            error_code = wire_builder.Error()
            error_messages = {
                BRepBuilderAPI_WireError.BRepBuilderAPI_EmptyWire: "Empty wire - no edges provided",
                BRepBuilderAPI_WireError.BRepBuilderAPI_DisconnectedWire: "Disconnected wire - edges don't connect to form a continuous path",
                BRepBuilderAPI_WireError.BRepBuilderAPI_NonManifoldWire: "Non-manifold wire - more than two edges meet at a vertex",
            }
            error_msg = error_messages.get(error_code, f"Unknown error code: {error_code}")
            raise ValueError(f"Wire construction failed: {error_msg}")

        return cls(wire_builder.Wire(), app)

    @classmethod
    def polyline(
        cls, points: Sequence[VectorLike], closed: bool = False, app: Optional[Any] = None
    ) -> "OcpCurve":
        """
        Create a polyline with one straight edge per segment.

        Args:
            points: Polyline vertices; 2D points lie in world XY
            closed: Join the last point back to the first
            app: Optional app instance

        Returns:
            New OcpCurve

        Raises:
            ValueError: If fewer than two distinct points are given
        """
        pts = _open_points(points, closed)
        if len(pts) < 2:
            raise ValueError(f"A polyline needs at least 2 points, got {len(pts)}")

        polygon = BRepBuilderAPI_MakePolygon()
        for p in pts:
            polygon.Add(_gp_pnt(p))
        if closed:
            polygon.Close()
        polygon.Build()

        if not polygon.IsDone():
            raise ValueError(
                f"Polyline construction failed for {len(pts)} point(s); "
                f"the points may all coincide"
            )
        return cls(polygon.Wire(), app)

    @classmethod
    def nurbs_polyline(
        cls, points: Sequence[VectorLike], closed: bool = False, app: Optional[Any] = None
    ) -> "OcpCurve":
        """Create a polyline as a single degree-1 B-spline edge."""
        pts = _open_points(points, closed)
        if closed:
            pts = pts + [pts[0]]
        if len(pts) < 2:
            raise ValueError(f"A polyline needs at least 2 points, got {len(pts)}")

        n = len(pts)
        poles = TColgp_Array1OfPnt(1, n)
        for i, p in enumerate(pts, start=1):
            poles.SetValue(i, _gp_pnt(p))

        # Degree 1: end knots have multiplicity 2, interior knots 1
        knots = TColStd_Array1OfReal(1, n)
        mults = TColStd_Array1OfInteger(1, n)
        for i in range(1, n + 1):
            knots.SetValue(i, float(i - 1))
            mults.SetValue(i, 2 if i in (1, n) else 1)

        spline = Geom_BSplineCurve(poles, knots, mults, 1)
        edge = BRepBuilderAPI_MakeEdge(spline).Edge()
        return cls(BRepBuilderAPI_MakeWire(edge).Wire(), app)

    @classmethod
    def rectangle(
        cls,
        width: float,
        height: float,
        plane: Optional[Plane] = None,
        centered: bool = True,
        app: Optional[Any] = None,
    ) -> "OcpCurve":
        """Create a counter-clockwise rectangle (about the plane normal) as a closed polyline."""
        plane = plane or Plane.world_xy()
        if centered:
            x0, y0 = -width / 2, -height / 2
        else:
            x0, y0 = 0.0, 0.0

        corners = [
            plane.to_world(x0, y0),
            plane.to_world(x0 + width, y0),
            plane.to_world(x0 + width, y0 + height),
            plane.to_world(x0, y0 + height),
        ]
        return cls.polyline(corners, closed=True, app=app)

    @classmethod
    def circle(
        cls, radius: float, plane: Optional[Plane] = None, app: Optional[Any] = None
    ) -> "OcpCurve":
        """Create a full circle centred on the plane origin."""
        if radius <= 0:
            raise ValueError(f"Circle radius must be positive, got {radius}")
        plane = plane or Plane.world_xy()
        axis = gp_Ax2(_gp_pnt(plane.origin), _gp_dir(plane.z_dir), _gp_dir(plane.x_dir))
        edge = BRepBuilderAPI_MakeEdge(gp_Circ(axis, radius)).Edge()
        return cls(BRepBuilderAPI_MakeWire(edge).Wire(), app)

    @classmethod
    def interpolate(
        cls,
        points: Sequence[VectorLike],
        closed: bool = False,
        tolerance: float = 1e-6,
        app: Optional[Any] = None,
    ) -> "OcpCurve":
        """Create a smooth B-spline passing through the given points."""
        pts = _open_points(points, closed)
        if len(pts) < 2:
            raise ValueError(f"Interpolation needs at least 2 points, got {len(pts)}")

        array = TColgp_HArray1OfPnt(1, len(pts))
        for i, p in enumerate(pts, start=1):
            array.SetValue(i, _gp_pnt(p))

        interpolator = GeomAPI_Interpolate(array, closed, tolerance)
        interpolator.Perform()
        if not interpolator.IsDone():
            raise ValueError(f"Interpolation through {len(pts)} point(s) failed")

        edge = BRepBuilderAPI_MakeEdge(interpolator.Curve()).Edge()
        return cls(BRepBuilderAPI_MakeWire(edge).Wire(), app)

    # ========== Queries ==========

    @property
    def is_closed(self) -> bool:
        return bool(BRep_Tool.IsClosed_s(self.obj))

    def edge_count(self) -> int:
        count = 0
        explorer = TopExp_Explorer(self.obj, TopAbs_EDGE)
        while explorer.More():
            count += 1
            explorer.Next()
        return count

    def segment_count(self) -> int:
        """Number of smooth spans: one per edge, one per knot span of degree-1 B-splines."""
        count = 0
        explorer = TopExp_Explorer(self.obj, TopAbs_EDGE)
        while explorer.More():
            adaptor = BRepAdaptor_Curve(TopoDS.Edge_s(explorer.Current()))
            if adaptor.GetType() == GeomAbs_BSplineCurve and adaptor.Degree() == 1:
                count += adaptor.NbKnots() - 1
            else:
                count += 1
            explorer.Next()
        return count

    def length(self) -> float:
        props = GProp_GProps()
        BRepGProp.LinearProperties_s(self.obj, props)
        return props.Mass()

    def points(self, samples: int = CURVE_SAMPLES) -> np.ndarray:
        adaptor = BRepAdaptor_CompCurve(self.obj)
        first, last = adaptor.FirstParameter(), adaptor.LastParameter()
        params = np.linspace(first, last, max(samples, 2))
        return np.array([_vector(adaptor.Value(float(t))).to_tuple() for t in params])

    def outline(self, samples: int = CURVE_SAMPLES) -> np.ndarray:
        """
        Points around the curve in wire order, keeping every vertex.

        Line edges contribute their start vertex, degree-1 B-splines their
        knots, and other edges ``samples`` points each. Open curves end with
        their end point.
        """
        points = []
        explorer = BRepTools_WireExplorer(self.obj)
        while explorer.More():
            edge = explorer.Current()
            adaptor = BRepAdaptor_Curve(edge)
            kind = adaptor.GetType()
            if kind == GeomAbs_Line:
                edge_points = [BRep_Tool.Pnt_s(explorer.CurrentVertex())]
            else:
                first, last = adaptor.FirstParameter(), adaptor.LastParameter()
                if kind == GeomAbs_BSplineCurve and adaptor.Degree() == 1:
                    spline = adaptor.BSpline()
                    knots = [spline.Knot(i) for i in range(1, spline.NbKnots() + 1)]
                    params = [t for t in knots if first <= t <= last]
                else:
                    params = np.linspace(first, last, max(samples, 2) + 1)
                edge_points = [adaptor.Value(float(t)) for t in params]
                if edge.Orientation() == TopAbs_REVERSED:
                    edge_points.reverse()
                edge_points = edge_points[:-1]
            points.extend(_vector(p).to_tuple() for p in edge_points)
            explorer.Next()

        if not self.is_closed:
            points.append(self.end_point().to_tuple())
        return np.array(points, dtype=float).reshape(-1, 3)

    def try_get_plane(self, tolerance: float) -> Optional[Plane]:
        finder = BRepBuilderAPI_FindPlane(self.obj, tolerance)
        if not finder.Found():
            # Straight curves lie in many planes; pick one through the line
            plane = self._line_plane(tolerance)
            if plane is None:
                logger.debug(f"No plane found within tolerance {tolerance}")
            return plane

        position = finder.Plane().Pln().Position()
        plane = Plane(
            _vector(position.Location()),
            _vector(position.XDirection()),
            _vector(position.YDirection()),
            _vector(position.Direction()),
        )

        # Closed curves run counter-clockwise about the fitted normal
        if self.is_closed:
            winding = newell_normal(self.outline())
            if float(np.dot(winding, plane.z_dir)) < 0:
                plane = plane.flipped()
        return plane

    def _line_plane(self, tolerance: float) -> Optional[Plane]:
        """A plane containing the curve when it is straight within tolerance."""
        pts = self.outline()
        if len(pts) < 2:
            return None
        centered = pts - pts.mean(axis=0)
        direction = np.linalg.svd(centered)[2][0]
        if np.ptp(centered @ direction) <= ZERO_TOLERANCE:
            return None
        if np.linalg.norm(np.cross(centered, direction), axis=1).max() > tolerance:
            return None
        if float(np.dot(pts[-1] - pts[0], direction)) < 0:
            direction = -direction
        return Plane.containing_line(Vector(*pts[0]), Vector(*direction))

    # ========== Transforms ==========

    def duplicate(self) -> "OcpCurve":
        copy = BRepBuilderAPI_Copy(self.obj).Shape()
        return OcpCurve(TopoDS.Wire_s(copy), self.app)

    def translate(self, offset: VectorLike) -> "OcpCurve":
        trsf = gp_Trsf()
        trsf.SetTranslation(_gp_vec(offset))
        moved = BRepBuilderAPI_Transform(self.obj, trsf, True).Shape()
        self.obj = TopoDS.Wire_s(moved)
        return self

    def extrude(self, direction: VectorLike) -> Optional[OcpBrep]:
        vector = _gp_vec(direction)
        if vector.Magnitude() <= ZERO_TOLERANCE or self.length() <= ZERO_TOLERANCE:
            logger.debug("Degenerate extrusion: zero-length curve or direction")
            return None

        try:
            prism_builder: Any = BRepPrimAPI_MakePrism(self.obj, vector, True)
        except Exception as e:
            # OCCT raises Standard_Failure subclasses from inside the constructor
            logger.warning(f"Prism construction raised: {e}")
            return None

        if not prism_builder.IsDone():
            return None
        shape = prism_builder.Shape()
        if shape.IsNull():
            return None
        return OcpBrep(shape)

    def __repr__(self) -> str:
        return f"OcpCurve(edges={self.edge_count()}, closed={self.is_closed})"
