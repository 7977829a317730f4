from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

import numpy as np
import pandas as pd

from .config.settings import OutputSelect
from .entities import RunResult
from .statistics import probability_summary

logger = logging.getLogger("flowcal.reporting")


def format_text_report(
    result: RunResult,
    labels: Sequence[tuple[str, str]],
    bands: Sequence[float],
) -> str:
    """
    Plain-text report of the calibrated value(s).

    With OutputSelect.ALL every output slot is printed; otherwise only the
    reported value of the selected output. In Monte Carlo mode the tracked
    output also gets its mean/variance and a probability summary.
    """
    lines: list[str] = []

    if result.select is OutputSelect.ALL:
        slots = list(enumerate(result.outputs.as_list()))
        tracked = int(OutputSelect.DIFFERENTIAL_PRESSURE)
    else:
        slots = [(int(result.select), result.value)]
        tracked = int(result.select)

    for index, value in slots:
        name, unit = labels[index]
        lines.append(f"{name}: {value:f} {unit}")
        if index == tracked and result.samples is not None:
            lines.extend(_probability_lines(result, unit, bands))

    return "\n".join(lines)


def _probability_lines(
    result: RunResult, unit: str, bands: Sequence[float]
) -> list[str]:
    stats = result.statistics
    summary = probability_summary(result.samples, result.value, bands)
    lines = [
        f"  Monte Carlo mean over {stats.n_samples} iterations: {stats.mean:f} {unit}"
        f" (variance {stats.variance:g}, std {stats.std:g})",
    ]
    for entry in summary["within"]:
        lines.append(
            f"  Pr({entry['low']:f} <= X <= {entry['high']:f}) = {entry['probability']:.4f}"
            f"  [+/-{entry['band'] * 100:g}%]"
        )
    lines.append(f"  5th / 95th percentile: {summary['p5']:f} / {summary['p95']:f} {unit}")
    return lines


def build_json_report(
    result: RunResult, labels: Sequence[tuple[str, str]]
) -> dict[str, Any]:
    """Build the JSON-serialisable report dictionary."""
    if result.select is OutputSelect.ALL:
        indices = range(len(labels))
        values = result.outputs.as_list()
    else:
        indices = [int(result.select)]
        values = {int(result.select): result.value}

    outputs = [
        {
            "name": labels[i][0],
            "unit": labels[i][1],
            "value": _json_float(values[i]),
        }
        for i in indices
    ]

    monte_carlo = None
    if result.samples is not None:
        monte_carlo = {
            "iterations": result.statistics.n_samples,
            "mean": _json_float(result.statistics.mean),
            "variance": _json_float(result.statistics.variance),
            "samples": [_json_float(v) for v in result.samples],
        }

    return {
        "mode": result.mode.value,
        "select": result.select.name,
        "outputs": outputs,
        "monte_carlo": monte_carlo,
        "cpu_time_seconds": result.cpu_time_seconds,
    }


def _json_float(value: float) -> float | None:
    # JSON has no NaN/inf; unwritten or non-finite slots become null
    value = float(value)
    return value if np.isfinite(value) else None


def format_json_report(result: RunResult, labels: Sequence[tuple[str, str]]) -> str:
    return json.dumps(build_json_report(result, labels), indent=2)


def format_benchmark_line(result: RunResult) -> str:
    """Single result and CPU time in microseconds."""
    return f"{result.value:f} {result.cpu_time_us}"


def format_timing_line(result: RunResult) -> str:
    return f"\nCPU time used: {result.cpu_time_seconds:f} seconds"


def write_outputs_csv(
    path: Path | str, result: RunResult, labels: Sequence[tuple[str, str]]
) -> Path:
    """Write the output slots as a header row of names and one row of values."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(
        [result.outputs.as_list()], columns=[name for name, _ in labels]
    )
    df.to_csv(path, index=False)
    logger.info("Output values saved to: %s", path)
    return path


def write_samples_file(path: Path | str, result: RunResult) -> Path:
    """Save Monte Carlo samples together with the CPU time used."""
    if result.samples is None:
        raise ValueError("No Monte Carlo samples to write (single-point run)")

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(
        {
            "sample": result.samples,
            "cpu_time_us": result.cpu_time_us,
        }
    )
    df.to_csv(path, index=False)
    logger.info("Monte Carlo samples saved to: %s", path)
    return path
