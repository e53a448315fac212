"""Smoke tests for example scripts.

These tests ensure that the example scripts can be imported and run their
main execution paths without raising exceptions.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

# Determine the repo root
ROOT = Path(__file__).resolve().parents[1]


def test_sarima_forecast_example_runs() -> None:
    """Test that examples/sarima_forecast.py runs successfully."""
    script = ROOT / "examples" / "sarima_forecast.py"
    assert script.exists(), f"Example script not found: {script}"

    result = subprocess.run(
        [sys.executable, str(script)],
        capture_output=True,
        text=True,
        check=False,
        timeout=60,
    )

    assert result.returncode == 0, (
        f"Example script failed with return code {result.returncode}.\n"
        f"STDOUT:\n{result.stdout}\n"
        f"STDERR:\n{result.stderr}"
    )

    assert "Forecast (next 7 days)" in result.stdout
    assert "Reloaded model reproduces forecast: True" in result.stdout
