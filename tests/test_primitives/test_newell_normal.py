import numpy as np
import numpy.testing as npt

from planarextrude.curve import newell_normal


def test_counter_clockwise_square_points_up():
    square = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float)

    npt.assert_allclose(newell_normal(square), [0, 0, 2])


def test_clockwise_square_points_down():
    square = np.array([[0, 0, 0], [0, 1, 0], [1, 1, 0], [1, 0, 0]], dtype=float)

    npt.assert_allclose(newell_normal(square), [0, 0, -2])


def test_repeated_closing_point_does_not_change_result():
    square = np.array([[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0], [0, 0, 0]], dtype=float)

    npt.assert_allclose(newell_normal(square), [0, 0, 2])


def test_degenerate_input_gives_zero():
    npt.assert_allclose(newell_normal(np.array([[0, 0, 0], [1, 0, 0]])), [0, 0, 0])
