"""Benchmark model fitting and forecasting."""

import time
from typing import Dict, Tuple

import numpy as np

import boxjenkins as bj


def _daily_series(n: int, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    t = np.arange(n)
    weekly = np.array([3.0, 1.0, -0.5, -1.0, 0.0, 4.0, 6.0])
    return 50.0 + 0.02 * t + weekly[t % 7] + rng.normal(size=n)


def benchmark_fit_predict(
    order: Tuple[int, int, int] = (1, 0, 1),
    seasonal_order: Tuple[int, int, int, int] = (1, 1, 1, 7),
    n: int = 736,
    horizon: int = 10,
    repeats: int = 5,
) -> Dict[str, float]:
    """Benchmark fit followed by predict.

    Args:
        order: Non-seasonal order (p, d, q).
        seasonal_order: Seasonal order (P, D, Q, s).
        n: Series length.
        horizon: Forecast horizon.
        repeats: Number of timed runs.

    Returns:
        Dictionary with timing results.
    """
    y = _daily_series(n)

    # Warmup
    bj.Model.sarima(order, seasonal_order).forecast(y, horizon)

    fit_time = 0.0
    predict_time = 0.0
    for _ in range(repeats):
        model = bj.Model.sarima(order, seasonal_order)

        start = time.perf_counter()
        model.fit(y)
        mid = time.perf_counter()
        model.predict(horizon)
        end = time.perf_counter()

        fit_time += mid - start
        predict_time += end - mid

    return {
        "n": n,
        "horizon": horizon,
        "n_columns": len(model.coefficient_labels),
        "fit_time_sec": fit_time / repeats,
        "predict_time_sec": predict_time / repeats,
    }


if __name__ == "__main__":
    print("Benchmarking fit + predict...")

    for order, seasonal_order in [
        ((2, 0, 0), (0, 0, 0, 0)),
        ((1, 0, 1), (1, 1, 1, 7)),
        ((2, 1, 2), (1, 1, 1, 7)),
    ]:
        results = benchmark_fit_predict(order, seasonal_order)
        print(f"SARIMA{order}{seasonal_order} on {results['n']} points:")
        print(f"  Fit:     {results['fit_time_sec']*1e3:.2f} ms")
        print(f"  Predict: {results['predict_time_sec']*1e3:.2f} ms")
