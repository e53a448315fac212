"""Tests for debug mode functionality."""

import numpy as np
import pytest

from boxjenkins.diagnostics import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from boxjenkins.timeseries import Model, solve_gram


def test_debug_mode_toggle_and_context() -> None:
    """Test debug mode toggling and context manager."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        assert not is_debug_enabled()

        with debug_context(True):
            assert is_debug_enabled()

        # Back to previous (False in this block)
        assert not is_debug_enabled()

        set_debug_enabled(True)
        assert is_debug_enabled()

        with debug_context(False):
            assert not is_debug_enabled()

        assert is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_nested() -> None:
    """Test nested debug contexts."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)

        with debug_context(True):
            assert is_debug_enabled()

            with debug_context(False):
                assert not is_debug_enabled()

            assert is_debug_enabled()

        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_debug_context_restores_after_exception() -> None:
    """Test that the previous state comes back when the block raises."""
    original = is_debug_enabled()

    try:
        set_debug_enabled(False)
        with pytest.raises(RuntimeError):
            with debug_context(True):
                raise RuntimeError("boom")
        assert not is_debug_enabled()
    finally:
        set_debug_enabled(original)


def test_fit_and_predict_in_debug_mode(weekly_series) -> None:
    """Test that invariant checks pass on a regular seasonal fit."""
    model = Model.sarima((1, 0, 1), (1, 1, 1, 7))

    with debug_context(True):
        model.fit(weekly_series[:300])
        forecast = model.predict(7)

    assert forecast.shape == (7,)
    assert np.all(np.isfinite(forecast))


def test_asymmetric_normal_matrix_rejected_in_debug_mode() -> None:
    """Test that solve_gram checks symmetry only while debugging."""
    gram = np.array([[2.0, 1.0], [0.0, 3.0]])
    moment = np.array([1.0, 1.0])

    with debug_context(False):
        beta = solve_gram(gram, moment)
    np.testing.assert_allclose(gram @ beta, moment)

    with debug_context(True):
        with pytest.raises(ValueError, match="not symmetric"):
            solve_gram(gram, moment)
