"""Tests for the glyph ParticleSystem."""
import numpy as np
import pytest

from signalhunt.sim.particles import GLYPHS, ParticleSystem


def make_system(**kwargs):
    return ParticleSystem(rng=np.random.default_rng(42), **kwargs)


class TestSpawn:
    def test_batch_size(self):
        ps = make_system()
        ps.spawn(100, 100)
        assert ps.count == 60

    def test_touch_batch_is_halved(self):
        ps = make_system(touch=True)
        ps.spawn(100, 100)
        assert ps.count == 30

    def test_spawn_starts_at_origin_with_randomised_params(self):
        ps = make_system()
        slots = ps.spawn(50, 75)

        np.testing.assert_array_equal(ps.x[slots], 50)
        np.testing.assert_array_equal(ps.y[slots], 75)
        assert np.all(ps.life[slots] >= 600)
        assert np.all(ps.life[slots] < 850)
        assert np.all(ps.size[slots] >= 16)
        assert np.all(ps.size[slots] < 24)
        assert np.all(np.abs(ps.angular[slots]) <= 0.04)
        assert np.all(ps.age[slots] == 0)

    def test_touch_particles_are_smaller(self):
        ps = make_system(touch=True)
        slots = ps.spawn(0, 0)
        assert np.all(ps.size[slots] >= 12)
        assert np.all(ps.size[slots] < 18)

    def test_live_view_uses_glyph_alphabet(self):
        ps = make_system()
        ps.spawn(0, 0, count=20)
        views = list(ps.live())
        assert len(views) == 20
        assert all(v.glyph in GLYPHS for v in views)
        assert all(v.alpha == pytest.approx(1.0) for v in views)

    def test_grows_when_full(self):
        ps = make_system(capacity=4)
        first = ps.spawn(1, 1, count=3)
        ps.spawn(2, 2, count=10)

        assert ps.capacity >= 13
        assert ps.count == 13
        np.testing.assert_array_equal(ps.x[first], 1)

    def test_zero_count_is_noop(self):
        ps = make_system()
        ps.spawn(0, 0, count=0)
        assert ps.count == 0
        assert not ps.running


class TestExpiry:
    def test_alive_one_ms_before_life(self):
        ps = make_system()
        slot = ps.spawn(0, 0, count=1)[0]
        ps.life[slot] = 600

        for _ in range(14):
            ps.advance(40)      # age 560
        ps.advance(39)          # age 599

        assert ps.alive[slot]
        assert ps.count == 1

    def test_removed_when_age_reaches_life(self):
        ps = make_system()
        slot = ps.spawn(0, 0, count=1)[0]
        ps.life[slot] = 600

        for _ in range(15):
            ps.advance(40)      # age 600

        assert not ps.alive[slot]
        assert list(ps.live()) == []

    def test_loop_suspends_and_resumes(self):
        ps = make_system()
        ps.spawn(0, 0, count=1)
        assert ps.running

        for _ in range(30):
            ps.advance(40)
        assert not ps.running

        ps.spawn(0, 0, count=1)
        assert ps.running

    def test_expired_slot_is_reused(self):
        ps = make_system(capacity=8)
        first = ps.spawn(0, 0, count=1)[0]
        for _ in range(30):
            ps.advance(40)

        second = ps.spawn(0, 0, count=1)[0]
        assert second == first
        assert ps.capacity == 8

    def test_clear(self):
        ps = make_system()
        ps.spawn(0, 0)
        ps.clear()
        assert ps.count == 0
        assert not ps.running


class TestPhysics:
    def _single(self):
        ps = make_system()
        slot = ps.spawn(0, 0, count=1)[0]
        ps.x[slot] = 0.0
        ps.y[slot] = 0.0
        ps.vx[slot] = 1.0
        ps.vy[slot] = 0.0
        ps.rotation[slot] = 0.0
        ps.angular[slot] = 0.01
        ps.life[slot] = 800
        return ps, slot

    def test_one_reference_frame(self):
        """At 16 ms, velocity integrates one-to-one after drag and gravity."""
        ps, slot = self._single()
        ps.advance(16)

        assert ps.vx[slot] == pytest.approx(0.995)
        assert ps.vy[slot] == pytest.approx(0.035)
        assert ps.x[slot] == pytest.approx(0.995)
        assert ps.y[slot] == pytest.approx(0.035)
        assert ps.rotation[slot] == pytest.approx(0.01)

    def test_step_scales_with_elapsed_time(self):
        ps, slot = self._single()
        ps.advance(32)
        assert ps.x[slot] == pytest.approx(0.995 * 2)

    def test_step_is_clamped(self):
        ps, slot = self._single()
        ps.advance(1000)
        assert ps.age[slot] == pytest.approx(40)
        assert ps.x[slot] == pytest.approx(0.995 * 40 / 16)

    def test_opacity_fades_linearly(self):
        ps, slot = self._single()
        ps.life[slot] = 600
        for _ in range(10):
            ps.advance(30)      # age 300
        assert ps.alpha()[0] == pytest.approx(0.5)
