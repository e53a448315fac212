"""Tests for timeseries utility functions."""

from __future__ import annotations

import numpy as np
import pytest

from boxjenkins.timeseries.utils import (
    create_lags,
    difference,
    difference_all,
    integrate,
    integrate_all,
    lag_count,
)


class TestDifference:
    """Tests for difference() function."""

    def test_difference_zero_returns_copy(self):
        """Test that d=0 leaves the series untouched."""
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        result = difference(x, d=0)
        np.testing.assert_array_equal(result, x)
        assert result is not x

    def test_difference_basic(self):
        """Test basic first differencing."""
        x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        np.testing.assert_allclose(difference(x, d=1), [1.0, 1.0, 1.0, 1.0])

    def test_difference_two(self):
        """Test double differencing of a quadratic-like series."""
        x = np.array([1.0, 2.0, 4.0, 7.0, 11.0, 16.0, 22.0])
        np.testing.assert_allclose(difference(x, d=2), np.ones(5))

    def test_difference_three(self):
        """Test triple differencing."""
        x = np.array([1.0, 2.0, 4.0, 8.0, 15.0, 26.0, 42.0])
        np.testing.assert_allclose(difference(x, d=3), np.ones(4))

    def test_difference_seasonal(self):
        """Test seasonal differencing at period 3."""
        x = np.array([1.0, 1.0, 1.0, 2.0, 2.0, 2.0, 3.0, 3.0, 3.0, 4.0, 4.0, 4.0])
        np.testing.assert_allclose(difference(x, d=1, periodicity=3), np.ones(9))

    def test_difference_ordinary_then_seasonal(self):
        """Test that a trend plus a period-3 step pattern differences to zero."""
        x = np.arange(1.0, 13.0) + np.repeat([1.0, 2.0, 3.0, 4.0], 3)
        result = difference(difference(x, 1, 1), 1, 3)
        np.testing.assert_allclose(result, np.zeros(8))

    def test_difference_2d_columnwise(self):
        """Test that tables are differenced one column at a time."""
        x = np.column_stack([np.arange(6.0), np.arange(6.0) ** 2])
        result = difference(x, d=1)
        assert result.shape == (5, 2)
        np.testing.assert_allclose(result[:, 0], np.ones(5))
        np.testing.assert_allclose(result[:, 1], [1.0, 3.0, 5.0, 7.0, 9.0])

    def test_difference_too_short(self):
        """Test differencing with insufficient data."""
        with pytest.raises(ValueError, match="Cannot difference"):
            difference(np.array([1.0, 2.0, 3.0]), d=1, periodicity=3)

    def test_difference_invalid(self):
        """Test differencing with invalid inputs."""
        with pytest.raises(ValueError, match="must be 1D or 2D"):
            difference(np.ones((2, 2, 2)), d=1)

        with pytest.raises(ValueError, match="d must be >= 0"):
            difference(np.ones(5), d=-1)

        with pytest.raises(ValueError, match="periodicity must be >= 1"):
            difference(np.ones(5), d=1, periodicity=0)


class TestDifferenceAll:
    """Tests for difference_all()."""

    def test_seasonal_pattern_removed(self):
        """Test that a repeating weekly pattern differences to zero."""
        week = np.array([7.0, 6.0, 4.0, 3.0, 4.0, 5.0, 6.0])
        y = np.tile(week, 4)
        result = difference_all(y, d=0, seasonal_d=1, periodicity=7)
        np.testing.assert_allclose(result, np.zeros(len(y) - 7))

    def test_length(self):
        """Test the length after combined differencing."""
        y = np.arange(30.0) ** 2
        result = difference_all(y, d=2, seasonal_d=1, periodicity=4)
        assert len(result) == 30 - 2 - 4

    def test_no_seasonality_ignores_periodicity(self):
        """Test that periodicity 0 is fine when there is no seasonal pass."""
        y = np.arange(10.0)
        np.testing.assert_allclose(difference_all(y, 1, 0, 0), np.ones(9))


class TestIntegrate:
    """Tests for integrate() and integrate_all()."""

    def test_integrate_one_step(self):
        """Test undoing first differencing from the last known value."""
        result = integrate(np.array([1.0, 1.0]), np.array([5.0, 6.0]))
        np.testing.assert_allclose(result, [7.0, 8.0])

    def test_integrate_seasonal_uses_last_period(self):
        """Test that seasonal integration seeds from the last s values."""
        last_known = np.array([0.0, 10.0, 20.0, 30.0])
        result = integrate(np.array([1.0, 2.0, 3.0, 4.0]), last_known, periodicity=3)
        np.testing.assert_allclose(result, [11.0, 22.0, 33.0, 15.0])

    def test_integrate_needs_enough_history(self):
        """Test that too few known values is an error."""
        with pytest.raises(ValueError, match="Need at least 3"):
            integrate(np.ones(2), np.ones(2), periodicity=3)

    @pytest.mark.parametrize(
        "y, d, seasonal_d, periodicity",
        [
            (np.arange(0.0, 100.0, 2.0), 1, 0, 0),
            (
                np.array(
                    [1.0, 2.0, 4.0, 7.0, 11.0, 16.0, 22.0, 29.0, 37.0, 46.0,
                     56.0, 67.0, 79.0, 92.0, 106.0, 121.0, 137.0, 154.0, 172.0]
                ),
                2,
                0,
                0,
            ),
            (
                np.array(
                    [1.0, 2.0, 4.0, 7.0, 11.0, 16.0, 22.0, 29.0, 37.0, 46.0,
                     56.0, 67.0, 79.0, 92.0, 106.0, 121.0, 137.0, 154.0, 172.0]
                )
                + np.tile([1.0, 4.0], 10)[:19],
                2,
                1,
                2,
            ),
            (np.tile([7.0, 6.0, 4.0, 3.0, 4.0, 5.0, 6.0], 4), 0, 1, 7),
        ],
    )
    def test_integrate_all_recovers_future(self, y, d, seasonal_d, periodicity):
        """Test that differenced future values integrate back to the originals."""
        cutoff = 14
        y_train, y_future = y[:cutoff], y[cutoff:]

        diffed = difference_all(y, d, seasonal_d, periodicity)[-len(y_future):]
        result = integrate_all(diffed, y_train, d, seasonal_d, periodicity)

        np.testing.assert_allclose(result, y_future)

    def test_integrate_all_random_walk(self, rng):
        """Test integration of an ARIMA(0,1,0)(0,1,0,12)-style series."""
        y = np.cumsum(rng.normal(size=120)) + np.tile(rng.normal(size=12), 10)
        diffed = difference_all(y, 1, 1, 12)[-24:]
        result = integrate_all(diffed, y[:-24], 1, 1, 12)
        np.testing.assert_allclose(result, y[-24:])


class TestCreateLags:
    """Tests for create_lags()."""

    def test_lags_zero(self):
        """Test that p=0 gives a table without columns."""
        y = np.arange(10.0)
        assert create_lags(y, 0, 0).shape == (10, 0)

    def test_lags_one(self):
        """Test a single lag."""
        y = np.arange(10.0)
        np.testing.assert_array_equal(create_lags(y, 1), np.arange(9.0).reshape(-1, 1))

    def test_lags_two_nearest_first(self):
        """Test that column 0 holds lag 1 and column 1 holds lag 2."""
        y = np.arange(10.0)
        expected = np.column_stack([np.arange(1.0, 9.0), np.arange(0.0, 8.0)])
        np.testing.assert_array_equal(create_lags(y, 2), expected)

    def test_lags_three(self):
        """Test three lags."""
        y = np.arange(10.0)
        expected = np.column_stack(
            [np.arange(2.0, 9.0), np.arange(1.0, 8.0), np.arange(0.0, 7.0)]
        )
        np.testing.assert_array_equal(create_lags(y, 3), expected)

    def test_lags_two_seasonal_two(self):
        """Test two lags at periodicity 2."""
        y = np.arange(10.0)
        expected = np.column_stack([np.arange(2.0, 8.0), np.arange(0.0, 6.0)])
        np.testing.assert_array_equal(create_lags(y, 2, 2), expected)

    def test_lags_three_seasonal_three(self):
        """Test three lags at periodicity 3."""
        y = np.arange(10.0, 30.0)
        expected = np.column_stack(
            [np.arange(16.0, 27.0), np.arange(13.0, 24.0), np.arange(10.0, 21.0)]
        )
        np.testing.assert_array_equal(create_lags(y, 3, 3), expected)

    def test_lag_rows_line_up_with_series(self):
        """Test that row r describes the observation at r + p*s."""
        y = np.arange(20.0) ** 2
        p, s = 2, 4
        lags = create_lags(y, p, s)
        for r in range(len(lags)):
            t = r + lag_count(p, s)
            assert lags[r, 0] == y[t - s]
            assert lags[r, 1] == y[t - 2 * s]

    def test_lags_invalid(self):
        """Test invalid lag requests."""
        with pytest.raises(ValueError, match="must be 1D"):
            create_lags(np.ones((3, 2)), 1)

        with pytest.raises(ValueError, match="p must be >= 0"):
            create_lags(np.ones(5), -1)

        with pytest.raises(ValueError, match="Need at least"):
            create_lags(np.ones(5), 3, 2)
