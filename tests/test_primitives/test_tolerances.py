import math

import pytest

from planarextrude.constants import DEFAULT_ABSOLUTE_TOLERANCE, ZERO_TOLERANCE
from planarextrude.extrude import ExtrudeParameters
from planarextrude.tolerances import Tolerances


class TestTolerances:
    """Test suite for document tolerances."""

    def test_defaults(self):
        tolerances = Tolerances()

        assert tolerances.absolute == DEFAULT_ABSOLUTE_TOLERANCE
        assert tolerances.angle_degrees == pytest.approx(1.0)

    def test_from_degrees(self):
        tolerances = Tolerances.from_degrees(0.01, 2.0)

        assert tolerances.absolute == 0.01
        assert tolerances.angle == pytest.approx(math.radians(2.0))

    @pytest.mark.parametrize("absolute,angle", [(0, 0.1), (-1e-3, 0.1), (1e-3, 0), (1e-3, -0.5)])
    def test_non_positive_values_are_rejected(self, absolute, angle):
        with pytest.raises(ValueError):
            Tolerances(absolute, angle)

    def test_replace_keeps_unspecified_values(self):
        tolerances = Tolerances(0.001, 0.02)

        updated = tolerances.replace(absolute=0.1)

        assert updated.absolute == 0.1
        assert updated.angle == 0.02
        assert tolerances.absolute == 0.001

    def test_json(self):
        tolerances = Tolerances(0.005, 0.03)

        assert Tolerances.from_json(tolerances.to_json()) == tolerances


class TestExtrudeParameters:
    """Test suite for the extrusion parameter record."""

    def test_defaults(self):
        params = ExtrudeParameters()

        assert params.distance == 1.0
        assert not params.both_sides
        assert not params.solid
        assert not params.up

    def test_distance_below_zero_tolerance_is_invalid(self):
        assert not ExtrudeParameters(distance=0.0).is_valid_distance()
        assert not ExtrudeParameters(distance=ZERO_TOLERANCE / 2).is_valid_distance()
        assert not ExtrudeParameters(distance=-ZERO_TOLERANCE / 2).is_valid_distance()
        assert ExtrudeParameters(distance=-0.5).is_valid_distance()
        assert ExtrudeParameters(distance=1e-6).is_valid_distance()

    @pytest.mark.parametrize("distance", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_distance_is_invalid(self, distance):
        assert not ExtrudeParameters(distance=distance).is_valid_distance()

    def test_from_json_fills_defaults(self):
        params = ExtrudeParameters.from_json({"distance": 2, "solid": True})

        assert params == ExtrudeParameters(distance=2.0, solid=True)
        assert ExtrudeParameters.from_json(params.to_json()) == params
