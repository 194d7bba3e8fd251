import numpy as np
import numpy.testing as npt
import pytest

from planarextrude.cad_types import Vector
from planarextrude.plane import Plane


def test_world_planes_are_right_handed():
    """Each standard plane has z = x cross y."""
    for plane in (Plane.world_xy(), Plane.world_xz(), Plane.world_yz()):
        z = np.cross(np.asarray(plane.x_dir), np.asarray(plane.y_dir))
        npt.assert_allclose(z, np.asarray(plane.z_dir), atol=1e-12)

    assert Plane.world_xy().normal.z == 1.0
    assert Plane.world_xz().normal.y == -1.0
    assert Plane.world_yz().normal.x == 1.0


def test_from_origin_normal_builds_orthonormal_frame():
    """A plane from origin and normal gets an orthonormal basis."""
    plane = Plane.from_origin_normal((1, 2, 3), (0, 0, 5))

    assert plane.origin == Vector(1, 2, 3)
    assert plane.normal == Vector(0, 0, 1)
    assert abs(plane.x_dir.dot(plane.z_dir)) < 1e-12
    assert abs(plane.y_dir.dot(plane.z_dir)) < 1e-12
    assert plane.x_dir.length() == pytest.approx(1.0)


def test_x_dir_is_projected_into_plane():
    """An x direction that leans out of the plane is made perpendicular to the normal."""
    plane = Plane((0, 0, 0), (1, 0, 1), None, (0, 0, 1))

    assert plane.x_dir == Vector(1, 0, 0)
    assert plane.y_dir == Vector(0, 1, 0)


def test_zero_normal_is_rejected():
    with pytest.raises(ValueError):
        Plane.from_origin_normal((0, 0, 0), (0, 0, 0))


def test_flipped_reverses_normal_and_stays_right_handed():
    """Flipping reverses the normal and keeps the frame right-handed."""
    plane = Plane.world_xy((0, 0, 2)).flipped()

    assert plane.normal == Vector(0, 0, -1)
    z = np.cross(np.asarray(plane.x_dir), np.asarray(plane.y_dir))
    npt.assert_allclose(z, np.asarray(plane.z_dir), atol=1e-12)
    assert plane.origin == Vector(0, 0, 2)


def test_translated_and_distance_to():
    """Translation moves the origin; distances are signed along the normal."""
    plane = Plane.world_xy()
    moved = plane.translated((0, 0, 3))

    assert plane.origin == Vector(0, 0, 0)
    assert moved.origin == Vector(0, 0, 3)
    assert moved.distance_to((5, 5, 4)) == pytest.approx(1.0)
    assert moved.distance_to((5, 5, 1)) == pytest.approx(-2.0)


def test_to_world_maps_plane_coordinates():
    plane = Plane.world_xz((0, 1, 0))

    assert plane.to_world(2, 3) == Vector(2, 1, 3)


def test_plane_json_serialization():
    """Plane JSON round trip keeps the frame."""
    plane = Plane.from_origin_normal((1, 2, 3), (1, 1, 0))

    restored = Plane.from_json(plane.to_json())

    assert restored.origin == plane.origin
    assert restored.z_dir == plane.z_dir
    assert restored.x_dir == plane.x_dir


def test_containing_line_prefers_upright_normal():
    """A plane through a sloped line tilts as little as possible away from world up."""
    plane = Plane.containing_line((1, 0, 0), (1, 0, 1))

    assert plane.x_dir == Vector(1, 0, 1).normalize()
    assert plane.normal == Vector(-1, 0, 1).normalize()
    assert plane.distance_to((3, 0, 2)) == pytest.approx(0.0, abs=1e-12)


def test_containing_vertical_line():
    plane = Plane.containing_line((0, 0, 0), (0, 0, 2))

    assert abs(plane.normal.z) < 1e-12
    assert plane.x_dir == Vector(0, 0, 1)
