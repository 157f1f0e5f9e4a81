"""Tests for gradients, the surface adapter and frame painting."""

import numpy as np
import pytest

import compositor
import config
from motion import AnimationContext, AnimationMode
from particles import Particle
from shapes import BlobShape, WaveShape
from surface import Surface


def _ctx(mode=AnimationMode.LISTENING, t=1.0):
    ctx = AnimationContext()
    ctx.apply_mode(mode)
    ctx.params.elapsed = t
    return ctx


class TestGradient:

    def test_concentric_is_linear_in_distance(self):
        xs = np.array([0.0, 5.0, 10.0, 20.0])
        ys = np.zeros(4)
        t = compositor.gradient_t(xs, ys, (0, 0), (0, 0), 10)
        assert t == pytest.approx([0.0, 0.5, 1.0, 1.0])

    def test_focal_point_and_end_circle(self):
        xs = np.array([2.0, 10.0, -10.0, 0.0])
        ys = np.array([0.0, 0.0, 0.0, 10.0])
        t = compositor.gradient_t(xs, ys, (2, 0), (0, 0), 10)
        assert t == pytest.approx([0.0, 1.0, 1.0, 1.0])

    def test_stops_interpolate_premultiplied(self):
        stops = [(0.0, (255, 0, 0, 1.0)), (1.0, (0, 0, 0, 0.0))]
        rgba = compositor.gradient_rgba(np.array([0.0, 0.5, 1.0]), stops)
        assert tuple(rgba[0]) == (255, 0, 0, 255)
        # fading into "transparent" keeps the hue
        assert tuple(rgba[1][:3]) == (255, 0, 0)
        assert rgba[1][3] == 127
        assert rgba[2][3] == 0


class TestSurface:

    def test_physical_size(self):
        s = Surface(100, 50, dpr=2)
        assert s.physical_size == (200, 100)
        assert s.image.size == (200, 100)
        assert s.valid

    def test_zero_size_invalid(self):
        assert not Surface(0, 0).valid
        assert not Surface(-20, 30).valid

    def test_scaled_resets(self):
        s = Surface(10, 10, dpr=3)
        with s.scaled():
            assert s.scale == 3
            assert s.to_px([(1, 2)]) == [(3.0, 6.0)]
        assert s.scale == 1.0
        with pytest.raises(RuntimeError):
            with s.scaled():
                raise RuntimeError("boom")
        assert s.scale == 1.0

    def test_resize_rederives_buffer(self):
        s = Surface(10, 10)
        s.resize(40, 20, dpr=1.5)
        assert s.image.size == (60, 30)
        assert s.grid()[0].shape == (30, 60)

    def test_release(self):
        s = Surface(10, 10)
        s.release()
        assert s.released
        assert not s.valid

    def test_box_is_clipped_and_scaled(self):
        s = Surface(10, 10, dpr=2)
        with s.scaled():
            assert s.box(-5, -5, 3, 3) == (0, 0, 6, 6)
            assert s.box(2, 2, 4, 4, pad=1) == (2, 2, 10, 10)
            assert s.box(20, 20, 30, 30) is None
        assert s.box(0, 0, 10, 10) == (0, 0, 10, 10)

    def test_grid_crop(self):
        s = Surface(10, 10)
        xs, ys = s.grid((2, 3, 6, 5))
        assert xs.shape == (2, 4)
        assert xs[0, 0] == 2.5
        assert ys[0, 0] == 3.5


class TestPaintFrame:

    @pytest.mark.parametrize("shape_cls", [BlobShape, WaveShape])
    def test_paints_pixels(self, shape_cls):
        s = Surface(48, 48)
        assert compositor.paint_frame(s, _ctx(), shape_cls())
        alpha = np.asarray(s.image)[..., 3]
        assert alpha.max() > 0
        assert alpha[24, 24] > 0
        assert s.scale == 1.0

    def test_device_pixel_ratio(self):
        s = Surface(32, 32, dpr=2)
        assert compositor.paint_frame(s, _ctx(), BlobShape())
        assert s.image.size == (64, 64)
        assert np.asarray(s.image)[32, 32, 3] > 0

    def test_frame_replaces_previous(self):
        s = Surface(40, 40)
        ctx = _ctx()
        compositor.paint_frame(s, ctx, BlobShape())
        first = np.asarray(s.image).copy()
        compositor.paint_frame(s, ctx, BlobShape())
        assert np.array_equal(first, np.asarray(s.image))

    def test_intensity_brightens(self):
        dim_ctx = _ctx(t=0.0)
        dim_ctx.params.intensity = 0.3
        bright_ctx = _ctx(t=0.0)
        bright_ctx.params.intensity = 1.0
        dim, bright = Surface(40, 40), Surface(40, 40)
        compositor.paint_frame(dim, dim_ctx, BlobShape())
        compositor.paint_frame(bright, bright_ctx, BlobShape())
        assert (np.asarray(bright.image)[..., 3].sum()
                > np.asarray(dim.image)[..., 3].sum())

    def test_invalid_surface_clears_only(self):
        s = Surface(0, 0)
        assert not compositor.paint_frame(s, _ctx(), BlobShape())
        assert np.asarray(s.image)[..., 3].max() == 0

    def test_missing_surface(self):
        assert not compositor.paint_frame(None, _ctx(), BlobShape())
        s = Surface(20, 20)
        s.release()
        assert not compositor.paint_frame(s, _ctx(), BlobShape())

    def test_paint_order(self, monkeypatch):
        calls = []
        for name in ("paint_glow", "paint_layers", "paint_core",
                     "paint_specular", "paint_particles"):
            monkeypatch.setattr(compositor, name,
                                lambda *args, _name=name: calls.append(_name))
        assert compositor.paint_frame(Surface(32, 32), _ctx(), BlobShape())
        assert calls == ["paint_glow", "paint_layers", "paint_core",
                         "paint_specular", "paint_particles"]

    def test_particles_drawn_over_layers(self, monkeypatch):
        color = tuple(config.PALETTE[1])
        monkeypatch.setattr(compositor, "compute_particles", lambda *args: [])
        under = Surface(48, 48)
        compositor.paint_frame(under, _ctx(), BlobShape())
        assert np.asarray(under.image)[24, 24, 3] > 0

        dot = Particle(24.0, 24.0, 4.0, 1.0, color)
        monkeypatch.setattr(compositor, "compute_particles", lambda *args: [dot])
        s = Surface(48, 48)
        compositor.paint_frame(s, _ctx(), BlobShape())
        assert tuple(np.asarray(s.image)[24, 24]) == color + (255,)


class TestPaintCost:

    def test_cropped_disc_matches_full_gradient(self):
        stops = [(0.0, (255, 255, 255, 0.8)), (1.0, (0, 0, 0, 0.0))]
        cropped, full = Surface(40, 40), Surface(40, 40)
        compositor._paint_disc(cropped, (20, 20), (20, 20), 8, stops)
        compositor._merge(full, compositor.radial_gradient(
            full, (20, 20), (20, 20), 8, stops))
        assert np.array_equal(np.asarray(cropped.image), np.asarray(full.image))

    @pytest.mark.parametrize("shape_cls, budget", [(BlobShape, 3), (WaveShape, 2)])
    def test_gradient_work_stays_local(self, monkeypatch, shape_cls, budget):
        evaluated = []
        real = compositor.gradient_rgba

        def counting(t, stops):
            evaluated.append(np.size(t))
            return real(t, stops)

        monkeypatch.setattr(compositor, "gradient_rgba", counting)
        s = Surface(200, 200, dpr=2)
        assert compositor.paint_frame(s, _ctx(), shape_cls())
        pw, ph = s.physical_size
        # one full-surface gradient per pass would be 9 or more surfaces
        assert 0 < sum(evaluated) < budget * pw * ph
