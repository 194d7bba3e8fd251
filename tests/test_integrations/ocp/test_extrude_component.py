"""
Tests for ExtrudePlanarComponent, the host adapter around extrude_planar_curve.
"""

import logging
import math

import pytest

import planarextrude.component as component_module
from planarextrude.component import (
    ExtrudePlanarComponent,
    RuntimeMessage,
    RuntimeMessageLevel,
)
from planarextrude.cad_types import Vector
from planarextrude.errors import ExtrusionFailedError, InvalidInputError
from planarextrude.extrude import ExtrudeParameters
from planarextrude.integrations.ocp.app import OpenCascadeOcpApp
from planarextrude.tolerances import Tolerances

CCW_SQUARE = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
NON_PLANAR = [(0, 0, 0), (1, 0, 0), (1, 1, 0.5), (0, 1, 0)]


@pytest.fixture
def app():
    """Create a fresh OpenCascadeOcpApp instance for each test."""
    return OpenCascadeOcpApp()


@pytest.fixture
def component(app):
    return ExtrudePlanarComponent(app)


@pytest.fixture
def square(app):
    return app.polyline(CCW_SQUARE, closed=True)


class TestSolve:
    """Test suite for successful solves."""

    def test_defaults(self, component, square):
        """Only the curve is required; distance defaults to 1."""
        brep = component.solve_instance({"curve": square})

        assert brep is not None
        assert component.output is brep
        assert component.runtime_messages == []
        assert not brep.is_solid
        assert brep.extent_along((0, 0, 1)) == pytest.approx(1.0, abs=1e-9)

    def test_solid_both_sides(self, component, square):
        brep = component.solve_instance(
            {"curve": square, "distance": 2.0, "both_sides": True, "solid": True}
        )

        assert brep.is_solid
        assert brep.volume() == pytest.approx(4.0, abs=1e-6)

    def test_output_is_registered_with_app(self, app, component, square):
        brep = component.solve_instance({"curve": square, "distance": 2.0, "solid": True})

        assert app.shape_count() == 1
        assert brep in app.get_shapes()
        assert app.volume() == pytest.approx(2.0, abs=1e-6)

    def test_up_input(self, component, app):
        clockwise = app.polyline(list(reversed(CCW_SQUARE)), closed=True)

        brep = component.solve_instance({"curve": clockwise, "distance": 2.0, "up": True})

        z = brep.vertices()[:, 2]
        assert z.min() == pytest.approx(0.0, abs=1e-9)
        assert z.max() == pytest.approx(2.0, abs=1e-9)

    def test_parameters_reach_the_core(self, component, square, monkeypatch):
        seen = []

        def recording_extrude(curve, params, tolerances, plane=None):
            seen.append((params, plane))
            raise InvalidInputError()

        monkeypatch.setattr(component_module, "extrude_with_parameters", recording_extrude)

        component.solve_instance(
            {"curve": square, "distance": "2.5", "both_sides": 1, "solid": True}
        )

        params, plane = seen[0]
        assert params == ExtrudeParameters(distance=2.5, both_sides=True, solid=True)
        assert plane is not None
        assert plane.normal == Vector(0, 0, 1)


class TestReportedErrors:
    """Non-planar curves and kernel failures produce one error message."""

    def test_non_planar_curve(self, component, app, caplog):
        curve = app.polyline(NON_PLANAR, closed=True)

        with caplog.at_level(logging.ERROR, logger="planarextrude.component"):
            result = component.solve_instance({"curve": curve, "distance": 1.0})

        assert result is None
        assert component.output is None
        assert component.runtime_messages == [
            RuntimeMessage(RuntimeMessageLevel.ERROR, "Curve is not planar")
        ]
        assert "Curve is not planar" in caplog.text
        assert app.shape_count() == 0

    def test_non_planar_curve_with_zero_distance_still_reports(self, component, app):
        """Planarity is checked before the distance."""
        curve = app.polyline(NON_PLANAR, closed=True)

        component.solve_instance({"curve": curve, "distance": 0.0})

        assert len(component.runtime_messages) == 1

    @pytest.mark.parametrize(
        "inputs",
        [
            {"distance": "far"},
            {"distance": None},
            {"solid": None},
            {"up": None, "both_sides": None},
            {"distance": float("nan")},
        ],
    )
    def test_non_planar_curve_is_reported_before_other_inputs(self, component, app, inputs):
        """Unreadable or unusable other inputs do not hide a non-planar curve."""
        curve = app.polyline(NON_PLANAR, closed=True)

        assert component.solve_instance({"curve": curve, **inputs}) is None
        assert component.runtime_messages == [
            RuntimeMessage(RuntimeMessageLevel.ERROR, "Curve is not planar")
        ]

    def test_extrusion_failure(self, component, square, monkeypatch):
        def failing_extrude(*args, **kwargs):
            raise ExtrusionFailedError()

        monkeypatch.setattr(component_module, "extrude_with_parameters", failing_extrude)

        assert component.solve_instance({"curve": square}) is None
        assert component.runtime_messages == [
            RuntimeMessage(RuntimeMessageLevel.ERROR, "Extrusion failed")
        ]

    def test_wrong_curve_type(self, component):
        assert component.solve_instance({"curve": "not a curve"}) is None
        assert component.runtime_messages[0].level is RuntimeMessageLevel.ERROR

    def test_messages_are_cleared_between_solves(self, component, app, square):
        component.solve_instance({"curve": app.polyline(NON_PLANAR, closed=True)})
        assert len(component.runtime_messages) == 1

        component.solve_instance({"curve": square})

        assert component.runtime_messages == []
        assert component.output is not None


class TestSilentNoOps:
    """Invalid input ends the solve without output or message."""

    @pytest.mark.parametrize(
        "distance", [0.0, 1e-12, -1e-11, float("nan"), float("inf"), float("-inf"), "nan"]
    )
    def test_unusable_distance(self, component, square, distance):
        assert component.solve_instance({"curve": square, "distance": distance}) is None
        assert component.runtime_messages == []

    def test_missing_curve(self, component):
        assert component.solve_instance({}) is None
        assert component.solve_instance({"curve": None}) is None
        assert component.runtime_messages == []

    @pytest.mark.parametrize("key", ["distance", "both_sides", "solid", "up"])
    def test_unreadable_input(self, component, square, key):
        assert component.solve_instance({"curve": square, key: None}) is None
        assert component.runtime_messages == []

    def test_non_numeric_distance(self, component, square):
        assert component.solve_instance({"curve": square, "distance": "far"}) is None
        assert component.runtime_messages == []


class TestTolerances:
    """Document tolerances are read at the start of every solve."""

    def test_tolerances_are_read_per_solve(self, app, component, square, monkeypatch):
        seen = []

        def recording_extrude(curve, params, tolerances, plane=None):
            seen.append(tolerances)
            raise InvalidInputError()

        monkeypatch.setattr(component_module, "extrude_with_parameters", recording_extrude)

        component.solve_instance({"curve": square})
        app.set_tolerances(absolute=0.05, angle=math.radians(5))
        component.solve_instance({"curve": square})

        assert seen[0] == Tolerances()
        assert seen[1] == Tolerances(0.05, math.radians(5))

    def test_loose_document_tolerance_accepts_slightly_bent_curve(self, app, component):
        curve = app.polyline([(0, 0, 0), (1, 0, 0), (1, 1, 0.01), (0, 1, 0)], closed=True)

        assert component.solve_instance({"curve": curve}) is None
        app.set_tolerances(absolute=0.1)
        assert component.solve_instance({"curve": curve}) is not None
