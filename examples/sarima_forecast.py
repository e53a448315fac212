"""Example: Forecasting daily data with a seasonal ARIMA model

Fits SARIMA(1,0,1)(1,1,1,7) to two years of synthetic daily observations,
prints the labelled coefficients and a one-week forecast, then saves the
fitted model to JSON and checks the reloaded copy forecasts the same.
"""

import os
import tempfile

import numpy as np

import boxjenkins as bj


def make_daily_series(n_days: int = 736, seed: int = 42) -> np.ndarray:
    """Trend plus a weekly pattern plus noise."""
    rng = np.random.default_rng(seed)
    t = np.arange(n_days)
    weekly = np.array([3.0, 1.0, -0.5, -1.0, 0.0, 4.0, 6.0])
    return 50.0 + 0.02 * t + weekly[t % 7] + rng.normal(scale=1.0, size=n_days)


def main() -> None:
    print("=" * 60)
    print("SARIMA(1,0,1)(1,1,1,7) on daily data")
    print("=" * 60)

    y = make_daily_series()
    y_train, y_test = y[:-7], y[-7:]

    model = bj.Model.sarima((1, 0, 1), (1, 1, 1, 7))
    model.fit(y_train)

    print("Coefficients:")
    for name, value in model.params().items():
        print(f"  {name:<10s} {value: .4f}")

    forecast = model.predict(7)
    mae = float(np.mean(np.abs(forecast - y_test)))

    print("\nForecast (next 7 days):")
    for day, (pred, actual) in enumerate(zip(forecast, y_test), start=1):
        print(f"  day {day}: forecast={pred:7.2f}  actual={actual:7.2f}")
    print(f"Mean absolute error: {mae:.3f}")

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "sarima.json")
        bj.dump_json_model(model, path, metadata={"producer": "sarima_forecast.py"})
        restored = bj.load_json_model(path)

    same = np.array_equal(restored.predict(7), forecast)
    print(f"\nReloaded model reproduces forecast: {same}")


if __name__ == "__main__":
    main()
