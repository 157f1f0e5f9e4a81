"""Tests for the noise and attenuation helpers."""

import math

import numpy as np
import pytest

import noise


class TestSmoothNoise:

    def test_deterministic(self):
        a = noise.smooth_noise(1.234, 5.678, 1.3, 1.0)
        b = noise.smooth_noise(1.234, 5.678, 1.3, 1.0)
        assert a == b

    def test_blob_noise_deterministic_over_arrays(self):
        angles = np.linspace(0, 2 * math.pi, 120, endpoint=False)
        first = noise.blob_noise(angles, 3.21, 4)
        second = noise.blob_noise(angles, 3.21, 4)
        assert np.array_equal(first, second)

    def test_array_matches_scalar(self):
        angles = np.array([0.0, 0.7, 2.5])
        vec = noise.smooth_noise(angles, 2.0, 1.6, 1.5)
        for i, a in enumerate(angles):
            assert vec[i] == pytest.approx(noise.smooth_noise(a, 2.0, 1.6, 1.5))

    def test_bounded_by_peak(self):
        angles = np.linspace(0, 2 * math.pi, 360)
        for t in np.linspace(0, 100, 50):
            vals = noise.smooth_noise(angles, t, 3.5, 2.25)
            assert np.all(np.abs(vals) <= noise.NOISE_PEAK + 1e-12)

    def test_varies_with_time(self):
        assert noise.smooth_noise(0.5, 0.0, 1.0, 1.0) != noise.smooth_noise(0.5, 1.0, 1.0, 1.0)

    def test_max_deformation(self):
        assert noise.max_deformation(1.0) == pytest.approx(2.1875 * 0.12)
        assert noise.max_deformation(0.0) == 0.0


class TestAttenuate:

    def test_center_is_one(self):
        for width in (10, 200, 333.5):
            assert noise.attenuate(width / 2, width) == pytest.approx(1.0)

    def test_edges_near_zero(self):
        assert noise.attenuate(0, 200) == pytest.approx(0.0, abs=0.01)
        assert noise.attenuate(200, 200) == pytest.approx(0.0, abs=0.01)

    def test_symmetric(self):
        width = 240
        for x in (0, 13, 60, 100, 119):
            assert noise.attenuate(x, width) == pytest.approx(noise.attenuate(width - x, width))

    def test_monotonic_toward_center(self):
        xs = np.arange(0, 101)
        vals = noise.attenuate(xs, 200)
        assert np.all(np.diff(vals) >= 0)

    def test_zero_width_is_guarded(self):
        assert noise.attenuate(5, 0) == 0.0
        assert noise.attenuate(5, -10) == 0.0
        assert np.array_equal(noise.attenuate(np.arange(3), 0), np.zeros(3))
