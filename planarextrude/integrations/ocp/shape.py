import logging
from typing import List, Optional, Tuple

import numpy as np

from planarextrude.shape import Brep, BrepSolidOrientation

logger = logging.getLogger(__name__)


class OcpBrep(Brep):
    def __init__(self, obj, app=None) -> None:
        self.app = app
        super().__init__(obj, app)

    # ========== Topology queries ==========

    def _subshapes(self, shape_type) -> List:
        from OCP.TopExp import TopExp_Explorer

        found = []
        explorer = TopExp_Explorer(self.obj, shape_type)
        while explorer.More():
            found.append(explorer.Current())
            explorer.Next()
        return found

    def faces(self) -> List:
        from OCP.TopAbs import TopAbs_FACE

        return self._subshapes(TopAbs_FACE)

    def face_count(self) -> int:
        return len(self.faces())

    @property
    def is_solid(self) -> bool:
        from OCP.TopAbs import TopAbs_SOLID

        return self.obj.ShapeType() == TopAbs_SOLID

    @property
    def is_closed(self) -> bool:
        from OCP.BRep import BRep_Tool
        from OCP.TopAbs import TopAbs_SHELL

        shells = self._subshapes(TopAbs_SHELL)
        if not shells:
            return False
        return all(BRep_Tool.IsClosed_s(shell) for shell in shells)

    @property
    def solid_orientation(self) -> BrepSolidOrientation:
        """
        Classify the point at infinity against the solid.

        A correctly oriented solid leaves infinity outside; an inside-out one
        reports it as inside.
        """
        from OCP.BRepClass3d import BRepClass3d_SolidClassifier
        from OCP.Precision import Precision
        from OCP.TopAbs import TopAbs_IN, TopAbs_OUT

        if not (self.is_solid and self.is_closed):
            return BrepSolidOrientation.NONE

        classifier = BRepClass3d_SolidClassifier(self.obj)
        classifier.PerformInfinitePoint(Precision.Confusion_s())
        state = classifier.State()
        if state == TopAbs_OUT:
            return BrepSolidOrientation.OUTWARD
        if state == TopAbs_IN:
            return BrepSolidOrientation.INWARD
        return BrepSolidOrientation.UNKNOWN

    def vertices(self) -> np.ndarray:
        from OCP.BRep import BRep_Tool
        from OCP.TopAbs import TopAbs_VERTEX
        from OCP.TopExp import TopExp
        from OCP.TopoDS import TopoDS
        from OCP.TopTools import TopTools_IndexedMapOfShape

        vertex_map = TopTools_IndexedMapOfShape()
        TopExp.MapShapes_s(self.obj, TopAbs_VERTEX, vertex_map)

        points = []
        for i in range(1, vertex_map.Extent() + 1):
            pnt = BRep_Tool.Pnt_s(TopoDS.Vertex_s(vertex_map.FindKey(i)))
            points.append((pnt.X(), pnt.Y(), pnt.Z()))
        return np.array(points, dtype=float).reshape(-1, 3)

    def bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        from OCP.Bnd import Bnd_Box
        from OCP.BRepBndLib import BRepBndLib

        box = Bnd_Box()
        BRepBndLib.AddOptimal_s(self.obj, box, False, False)
        lo, hi = box.CornerMin(), box.CornerMax()
        return (
            np.array([lo.X(), lo.Y(), lo.Z()]),
            np.array([hi.X(), hi.Y(), hi.Z()]),
        )

    def volume(self) -> float:
        """
        Calculate the signed volume of the shape using OpenCASCADE's GProp_GProps.

        Returns:
            float: Volume in cubic units, negative for inside-out solids
        """
        from OCP.BRepGProp import BRepGProp
        from OCP.GProp import GProp_GProps

        props = GProp_GProps()
        BRepGProp.VolumeProperties_s(self.obj, props)
        return props.Mass()

    def area(self) -> float:
        from OCP.BRepGProp import BRepGProp
        from OCP.GProp import GProp_GProps

        props = GProp_GProps()
        BRepGProp.SurfaceProperties_s(self.obj, props)
        return props.Mass()

    # ========== Editing ==========

    def split_kinky_faces(self, angle_tolerance: float, tolerance: float) -> "OcpBrep":
        """
        Split faces along C0 knots, then re-join neighbours that meet smoothly.

        Dividing by continuity cuts every surface at its C0 knots. Faces that end
        up on the same surface within ``angle_tolerance`` (for example the two
        halves of a straight run of a polyline) are merged again, so the result
        has a face boundary exactly where the profile has a kink.

        Args:
            angle_tolerance: Crease angle in radians below which faces are joined
            tolerance: Linear tolerance for splitting and merging

        Returns:
            OcpBrep: Self (modified in-place) for method chaining
        """
        from OCP.GeomAbs import GeomAbs_C1
        from OCP.ShapeUpgrade import (
            ShapeUpgrade_ShapeDivideContinuity,
            ShapeUpgrade_UnifySameDomain,
        )

        before = self.face_count()

        divider = ShapeUpgrade_ShapeDivideContinuity(self.obj)
        divider.SetTolerance(tolerance)
        divider.SetBoundaryCriterion(GeomAbs_C1)
        divider.SetPCurveCriterion(GeomAbs_C1)
        divider.SetSurfaceCriterion(GeomAbs_C1)
        divider.Perform()
        divided = divider.Result()
        if divided.IsNull():
            divided = self.obj

        unifier = ShapeUpgrade_UnifySameDomain(divided, True, True, False)
        unifier.SetLinearTolerance(tolerance)
        unifier.SetAngularTolerance(angle_tolerance)
        unifier.Build()
        unified = unifier.Shape()

        self.obj = divided if unified.IsNull() else unified
        logger.debug(f"Split kinky faces: {before} -> {self.face_count()} face(s)")
        return self

    def cap_planar_holes(self, tolerance: float) -> Optional["OcpBrep"]:
        """
        Close every planar free boundary with a flat face and build a solid.

        Args:
            tolerance: Linear tolerance for boundary detection and sewing

        Returns:
            A new closed OcpBrep solid, or None when capping is not possible
        """
        from OCP.BRep import BRep_Tool
        from OCP.BRepBuilderAPI import (
            BRepBuilderAPI_MakeFace,
            BRepBuilderAPI_MakeSolid,
            BRepBuilderAPI_Sewing,
        )
        from OCP.ShapeAnalysis import ShapeAnalysis_FreeBounds
        from OCP.TopAbs import TopAbs_SHELL, TopAbs_WIRE
        from OCP.TopExp import TopExp_Explorer
        from OCP.TopoDS import TopoDS

        free_bounds = ShapeAnalysis_FreeBounds(self.obj, tolerance, False, False)
        if free_bounds.GetOpenWires().NbChildren() > 0:
            logger.debug("Cannot cap: shell has open free boundaries")
            return None

        caps = []
        explorer = TopExp_Explorer(free_bounds.GetClosedWires(), TopAbs_WIRE)
        while explorer.More():
            face_maker = BRepBuilderAPI_MakeFace(TopoDS.Wire_s(explorer.Current()), True)
            if not face_maker.IsDone():
                logger.debug("Cannot cap: free boundary is not planar")
                return None
            caps.append(face_maker.Face())
            explorer.Next()

        if not caps:
            return None

        sewing = BRepBuilderAPI_Sewing(tolerance)
        sewing.Add(self.obj)
        for cap in caps:
            sewing.Add(cap)
        sewing.Perform()
        sewed = sewing.SewedShape()

        shells = []
        explorer = TopExp_Explorer(sewed, TopAbs_SHELL)
        while explorer.More():
            shells.append(TopoDS.Shell_s(explorer.Current()))
            explorer.Next()

        if len(shells) != 1 or not BRep_Tool.IsClosed_s(shells[0]):
            logger.debug(f"Cannot cap: sewing produced {len(shells)} shell(s)")
            return None

        solid_maker = BRepBuilderAPI_MakeSolid(shells[0])
        if not solid_maker.IsDone():
            return None
        return OcpBrep(solid_maker.Solid())

    def flip(self) -> "OcpBrep":
        """
        Reverse the orientation of every face.

        Solids are rebuilt from their reversed shells so the solid itself keeps
        a forward orientation.

        Returns:
            OcpBrep: Self (modified in-place) for method chaining
        """
        from OCP.BRep import BRep_Builder
        from OCP.TopAbs import TopAbs_SHELL
        from OCP.TopoDS import TopoDS_Solid

        if self.is_solid:
            builder = BRep_Builder()
            solid = TopoDS_Solid()
            builder.MakeSolid(solid)
            for shell in self._subshapes(TopAbs_SHELL):
                builder.Add(solid, shell.Reversed())
            self.obj = solid
        else:
            self.obj = self.obj.Reversed()
        return self

    # ========== Export ==========

    def to_stl(self, file_name: str):
        # The constructor used here automatically calls mesh.Perform(). https://dev.opencascade.org/doc/refman/html/class_b_rep_mesh___incremental_mesh.html#a3a383b3afe164161a3aa59a492180ac6
        from OCP.BRepMesh import BRepMesh_IncrementalMesh
        from OCP.StlAPI import StlAPI_Writer

        tolerance = 1e-3
        angular_tolerance = 0.1
        ascii = False
        relative = True
        parallel = True
        BRepMesh_IncrementalMesh(
            self.obj, tolerance, relative, angular_tolerance, parallel
        )
        writer = StlAPI_Writer()
        writer.ASCIIMode = ascii

        return writer.Write(self.obj, file_name)

    def to_step(self, file_name: str) -> None:
        """
        Export shape to STEP file.

        Args:
            file_name: Path to save the STEP file
        """
        from OCP.IFSelect import IFSelect_RetDone
        from OCP.STEPControl import STEPControl_StepModelType, STEPControl_Writer

        step_writer = STEPControl_Writer()
        step_writer.Transfer(self.obj, STEPControl_StepModelType.STEPControl_AsIs)
        status = step_writer.Write(file_name)
        if status != IFSelect_RetDone:
            raise RuntimeError("Failed to write STEP file.")

    def __repr__(self) -> str:
        kind = "solid" if self.is_solid else "shell"
        return f"OcpBrep({kind}, faces={self.face_count()})"
