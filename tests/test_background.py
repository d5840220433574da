"""Tests for the falling-glyph BackgroundField."""
import numpy as np
import pytest

from signalhunt.sim.background import LETTERS, BackgroundField


class FixedRng:
    """Stands in for numpy's Generator with constant draws."""

    def __init__(self, value):
        self.value = value

    def random(self, n):
        return np.full(n, self.value)

    def integers(self, low, high, n):
        return np.full(n, low)


class TestColumns:
    def test_column_count_from_width(self):
        field = BackgroundField(180, 100, cell_size=18, rng=np.random.default_rng(1))
        assert field.columns == 10

    def test_at_least_one_column(self):
        field = BackgroundField(5, 100, cell_size=18, rng=np.random.default_rng(1))
        assert field.columns == 1

    def test_initial_drops_within_height(self):
        field = BackgroundField(720, 400, cell_size=18, rng=np.random.default_rng(2))
        assert np.all(field.drops >= 0)
        assert np.all(field.drops < 400)

    def test_grow_preserves_existing_columns(self):
        """Widening keeps in-flight drops and adds fresh ones."""
        field = BackgroundField(180, 100, cell_size=18, rng=np.random.default_rng(3))
        field.drops[:] = np.arange(10) * 7.0
        before = field.drops.copy()

        field.resize(360, 100)

        assert field.columns == 20
        np.testing.assert_array_equal(field.drops[:10], before)
        assert np.all(field.drops[10:] < 100)

    def test_shrink_truncates_tail(self):
        field = BackgroundField(180, 100, cell_size=18, rng=np.random.default_rng(4))
        before = field.drops.copy()

        field.resize(90, 100)

        assert field.columns == 5
        np.testing.assert_array_equal(field.drops, before[:5])


class TestAdvance:
    def test_drop_moves_one_cell_per_frame(self):
        field = BackgroundField(180, 1000, cell_size=18, rng=np.random.default_rng(5))
        field.drops[:] = 0.0

        strikes = field.advance()

        np.testing.assert_array_equal(field.drops, np.full(10, 18.0))
        np.testing.assert_array_equal(strikes.y, np.zeros(10))
        np.testing.assert_array_equal(strikes.x, np.arange(10) * 18.0)
        assert len(strikes.glyphs) == 10
        assert all(g in LETTERS for g in strikes.glyphs)
        assert strikes.jitter_x is None

    def test_strike_uses_floored_position(self):
        field = BackgroundField(18, 1000, cell_size=18, rng=np.random.default_rng(6))
        field.drops[:] = 41.7
        strikes = field.advance()
        assert strikes.y[0] == 41.0

    def test_no_reset_above_bottom(self):
        field = BackgroundField(180, 1000, cell_size=18, rng=FixedRng(0.999))
        field.drops[:] = 100.0
        field.advance()
        assert np.all(field.drops == 118.0)

    def test_reset_past_bottom_when_draw_exceeds_threshold(self):
        field = BackgroundField(180, 100, cell_size=18, rng=FixedRng(0.99))
        field.drops[:] = 100.0
        field.advance()
        assert np.all(field.drops == 0.0)

    def test_normal_mode_keeps_falling_below_threshold(self):
        """A draw of 0.9 does not beat the 0.975 threshold."""
        field = BackgroundField(180, 100, cell_size=18, rng=FixedRng(0.9))
        field.drops[:] = 100.0
        field.advance()
        assert np.all(field.drops == 118.0)

    def test_chaos_mode_resets_more_eagerly(self):
        """The same 0.9 draw beats the chaos threshold of 0.85."""
        field = BackgroundField(180, 100, cell_size=18, chaos=True, rng=FixedRng(0.9))
        field.drops[:] = 100.0
        field.advance()
        assert np.all(field.drops == 0.0)


class TestChaos:
    def test_fade_alpha(self):
        field = BackgroundField(180, 100, rng=np.random.default_rng(7))
        assert field.fade_alpha == pytest.approx(0.05)
        field.chaos = True
        assert field.fade_alpha == pytest.approx(0.12)

    def test_speed_multiplier_range(self):
        field = BackgroundField(1800, 10000, cell_size=18, chaos=True, rng=np.random.default_rng(8))
        field.drops[:] = 0.0
        field.advance()
        assert np.all(field.drops >= 18 * 0.8)
        assert np.all(field.drops < 18 * 1.3)

    def test_jittered_double_strike(self):
        field = BackgroundField(1800, 1000, cell_size=18, chaos=True, rng=np.random.default_rng(9))
        strikes = field.advance()
        assert strikes.jitter_x is not None
        offset = strikes.jitter_x - strikes.x
        assert np.all(offset >= -9)
        assert np.all(offset < 9)
