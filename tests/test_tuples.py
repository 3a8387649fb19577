"""Tests for tuple, color and tolerance modules.

This module tests point/vector arithmetic, the color operations used for
blending and output, and the approximate float comparison they rely on.
"""

import math
import sys
import unittest
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.append(str(Path(__file__).resolve().parent.parent))

from raytracer import math_utils
from raytracer.color import Color, channels_to_rgb255
from raytracer.tuples import Tuple, point, vector


class TestFloatEquals(unittest.TestCase):
    """Test approximate scalar equality."""

    def test_within_epsilon(self):
        self.assertTrue(math_utils.float_equals(1.0, 1.0 + 5e-6))
        self.assertTrue(math_utils.float_equals(-3.0, -3.0 - 9e-6))

    def test_outside_epsilon(self):
        self.assertFalse(math_utils.float_equals(1.0, 1.0001))
        self.assertFalse(math_utils.float_equals(0.0, 2e-5))

    def test_within_ulps_for_large_values(self):
        # Large values differ by far more than epsilon after a few steps
        a = 1e20
        b = np.nextafter(np.nextafter(a, np.inf), np.inf)
        self.assertGreater(abs(b - a), math_utils.EPSILON)
        self.assertTrue(math_utils.float_equals(a, float(b)))
        self.assertEqual(math_utils.ulp_distance(a, float(b)), 2)

    def test_beyond_ulps_for_large_values(self):
        self.assertFalse(math_utils.float_equals(1e20, 1.0001e20))

    def test_nan_never_equal(self):
        self.assertFalse(math_utils.float_equals(float("nan"), float("nan")))
        self.assertFalse(math_utils.float_equals(float("nan"), 0.0))

    def test_infinities(self):
        self.assertTrue(math_utils.float_equals(float("inf"), float("inf")))
        self.assertFalse(math_utils.float_equals(float("inf"), -float("inf")))


class TestTuple(unittest.TestCase):
    """Test tuple, point and vector arithmetic."""

    def test_point(self):
        t = Tuple(4.3, -4.2, 3.1, 1.0)
        self.assertTrue(t.is_point())
        self.assertFalse(t.is_vector())
        self.assertTrue(point(4.3, -4.2, 3.1).equals(t))

    def test_vector(self):
        t = Tuple(4.3, -4.2, 3.1, 0.0)
        self.assertFalse(t.is_point())
        self.assertTrue(t.is_vector())
        self.assertTrue(vector(4.3, -4.2, 3.1).equals(t))

    def test_add(self):
        a1 = Tuple(3.0, -2.0, 5.0, 1.0)
        a2 = Tuple(-2.0, 3.0, 1.0, 0.0)
        self.assertTrue(a1.add(a2).equals(Tuple(1.0, 1.0, 6.0, 1.0)))
        self.assertEqual(a1 + a2, Tuple(1.0, 1.0, 6.0, 1.0))

    def test_subtract_points(self):
        p1 = point(3.0, 2.0, 1.0)
        p2 = point(5.0, 6.0, 7.0)
        result = p1.subtract(p2)
        self.assertTrue(result.equals(vector(-2.0, -4.0, -6.0)))
        self.assertTrue(result.is_vector())

    def test_subtract_vector_from_point(self):
        p = point(3.0, 2.0, 1.0)
        v = vector(5.0, 6.0, 7.0)
        self.assertEqual(p - v, point(-2.0, -4.0, -6.0))

    def test_subtract_vectors(self):
        v1 = vector(3.0, 2.0, 1.0)
        v2 = vector(5.0, 6.0, 7.0)
        self.assertEqual(v1 - v2, vector(-2.0, -4.0, -6.0))

    def test_subtract_from_zero_vector(self):
        zero = vector(0.0, 0.0, 0.0)
        v = vector(1.0, -2.0, 3.0)
        self.assertEqual(zero - v, vector(-1.0, 2.0, -3.0))

    def test_add_then_subtract_roundtrip(self):
        a = Tuple(0.1, -7.25, 3.3, 1.0)
        b = Tuple(12.5, 0.7, -0.01, 0.0)
        self.assertTrue(a.add(b).subtract(b).equals(a))

    def test_negate(self):
        a = Tuple(1.0, -2.0, 3.0, -4.0)
        self.assertTrue(a.negate().equals(Tuple(-1.0, 2.0, -3.0, 4.0)))
        self.assertEqual(-a, Tuple(-1.0, 2.0, -3.0, 4.0))

    def test_scale(self):
        a = Tuple(1.0, -2.0, 3.0, -4.0)
        self.assertTrue(a.scale(3.5).equals(Tuple(3.5, -7.0, 10.5, -14.0)))
        self.assertEqual(a * 0.5, Tuple(0.5, -1.0, 1.5, -2.0))
        self.assertEqual(0.5 * a, Tuple(0.5, -1.0, 1.5, -2.0))

    def test_divide(self):
        a = Tuple(1.0, -2.0, 3.0, -4.0)
        self.assertTrue(a.divide(2.0).equals(Tuple(0.5, -1.0, 1.5, -2.0)))
        self.assertEqual(a / 2, Tuple(0.5, -1.0, 1.5, -2.0))

    def test_magnitude(self):
        self.assertTrue(math_utils.float_equals(vector(1.0, 0.0, 0.0).magnitude(), 1.0))
        self.assertTrue(math_utils.float_equals(vector(0.0, 1.0, 0.0).magnitude(), 1.0))
        self.assertTrue(math_utils.float_equals(vector(0.0, 0.0, 1.0).magnitude(), 1.0))
        self.assertTrue(math_utils.float_equals(vector(1.0, 2.0, 3.0).magnitude(), math.sqrt(14.0)))
        self.assertTrue(math_utils.float_equals(vector(-1.0, -2.0, -3.0).magnitude(), math.sqrt(14.0)))

    def test_magnitude_includes_w(self):
        self.assertAlmostEqual(Tuple(0.0, 0.0, 3.0, 4.0).magnitude(), 5.0)

    def test_normalize(self):
        self.assertTrue(vector(4.0, 0.0, 0.0).normalize().equals(vector(1.0, 0.0, 0.0)))
        self.assertTrue(
            vector(1.0, 2.0, 3.0).normalize().equals(vector(0.26726, 0.53452, 0.80178))
        )

    def test_normalized_magnitude_is_one(self):
        for v in [vector(1.0, 2.0, 3.0), vector(-0.001, 5.0, 1e3), vector(7.0, -7.0, 0.5)]:
            self.assertTrue(math_utils.float_equals(v.normalize().magnitude(), 1.0))

    def test_normalize_zero_vector_is_not_finite(self):
        result = vector(0.0, 0.0, 0.0).normalize()
        self.assertTrue(all(math.isnan(c) for c in result))

    def test_divide_by_zero_gives_infinity(self):
        result = vector(1.0, -1.0, 0.0).divide(0.0)
        self.assertEqual(result.x, float("inf"))
        self.assertEqual(result.y, -float("inf"))
        self.assertTrue(math.isnan(result.z))

    def test_dot(self):
        a = vector(1.0, 2.0, 3.0)
        b = vector(2.0, 3.0, 4.0)
        self.assertTrue(math_utils.float_equals(a.dot(b), 20.0))

    def test_cross(self):
        a = vector(1.0, 2.0, 3.0)
        b = vector(2.0, 3.0, 4.0)
        self.assertTrue(a.cross(b).equals(vector(-1.0, 2.0, -1.0)))
        self.assertTrue(b.cross(a).equals(vector(1.0, -2.0, 1.0)))

    def test_cross_is_anticommutative(self):
        a = vector(0.3, -1.7, 2.2)
        b = vector(-4.0, 0.25, 9.5)
        self.assertTrue(a.cross(b).equals(b.cross(a).negate()))

    def test_cross_result_is_vector(self):
        # w is ignored even for points
        self.assertTrue(point(1.0, 0.0, 0.0).cross(point(0.0, 1.0, 0.0)).is_vector())

    def test_immutable(self):
        t = point(1.0, 2.0, 3.0)
        with self.assertRaises(AttributeError):
            t.x = 5.0

    def test_to_array(self):
        np.testing.assert_allclose(Tuple(1.0, 2.0, 3.0, 4.0).to_array(), [1.0, 2.0, 3.0, 4.0])


class TestColor(unittest.TestCase):
    """Test color operations and output conversion."""

    def test_channels(self):
        c = Color(-0.5, 0.4, 1.7)
        self.assertEqual(c.r, -0.5)
        self.assertEqual(c.g, 0.4)
        self.assertEqual(c.b, 1.7)

    def test_add(self):
        c1 = Color(0.9, 0.6, 0.75)
        c2 = Color(0.7, 0.1, 0.25)
        self.assertTrue(c1.add(c2).equals(Color(1.6, 0.7, 1.0)))
        self.assertEqual(c1 + c2, Color(1.6, 0.7, 1.0))

    def test_subtract(self):
        c1 = Color(0.9, 0.6, 0.75)
        c2 = Color(0.7, 0.1, 0.25)
        self.assertTrue(c1.subtract(c2).equals(Color(0.2, 0.5, 0.5)))
        self.assertEqual(c1 - c2, Color(0.2, 0.5, 0.5))

    def test_scale(self):
        c = Color(0.2, 0.3, 0.4)
        self.assertTrue(c.scale(2.0).equals(Color(0.4, 0.6, 0.8)))
        self.assertEqual(2 * c, Color(0.4, 0.6, 0.8))

    def test_multiply(self):
        c1 = Color(1.0, 0.2, 0.4)
        c2 = Color(0.9, 1.0, 0.1)
        self.assertTrue(c1.multiply(c2).equals(Color(0.9, 0.2, 0.04)))
        self.assertEqual(c1 * c2, Color(0.9, 0.2, 0.04))

    def test_black(self):
        self.assertEqual(Color.black(), Color(0.0, 0.0, 0.0))

    def test_immutable(self):
        c = Color(0.1, 0.2, 0.3)
        with self.assertRaises(AttributeError):
            c.r = 1.0

    def test_to_rgb255(self):
        self.assertEqual(Color(1.0, 0.0, 0.0).to_rgb255(), (255, 0, 0))
        self.assertEqual(Color(0.0, 0.5, 0.0).to_rgb255(), (0, 128, 0))
        self.assertEqual(Color(1.0, 0.8, 0.6).to_rgb255(), (255, 204, 153))

    def test_to_rgb255_clamps(self):
        self.assertEqual(Color(1.5, 0.0, 0.0).to_rgb255(), (255, 0, 0))
        self.assertEqual(Color(-0.5, 0.0, 1.0).to_rgb255(), (0, 0, 255))

    def test_channels_to_rgb255_nan(self):
        result = channels_to_rgb255(np.array([float("nan"), float("inf"), -float("inf")]))
        np.testing.assert_array_equal(result, [0, 255, 0])


if __name__ == "__main__":
    unittest.main()
