"""Execution engine for single-point and Monte Carlo calibration runs."""

from __future__ import annotations

import logging
import time
from typing import Any

import numpy as np

from ..config.settings import ExecutionMode, OutputSelect, RunSettings
from ..entities import CalibrationConstants, InputRanges, OutputSample, RunResult
from ..model import calculate_sensor_output
from ..statistics import mean_and_variance
from .stochastics import InputSampler

logger = logging.getLogger("flowcal.engine")


class CalibrationEngine:
    """Samples sensor inputs and evaluates the calibration model."""

    def __init__(
        self,
        calibration: CalibrationConstants,
        ranges: InputRanges,
    ):
        self.calibration = calibration
        self.ranges = ranges

    @classmethod
    def from_config(cls, constants: dict[str, Any]) -> "CalibrationEngine":
        return cls(
            CalibrationConstants.from_config(constants),
            InputRanges.from_config(constants),
        )

    def run(self, settings: RunSettings) -> RunResult:
        """Run in the mode selected by the settings."""
        if settings.mode is ExecutionMode.MONTE_CARLO:
            return self.run_monte_carlo(
                settings.n_iterations, select=settings.select, seed=settings.seed
            )
        return self.run_single_point(select=settings.select, seed=settings.seed)

    def run_single_point(
        self, select: OutputSelect = OutputSelect.ALL, seed: int | None = None
    ) -> RunResult:
        """Execute one sampling + evaluation pass.

        Args:
            select: Which output(s) to compute.
            seed: Random seed for reproducibility.

        Returns:
            RunResult with the tracked value and the output slots.
        """
        sampler = InputSampler(self.ranges, seed=seed)
        outputs = OutputSample()

        start = time.process_time()
        value = calculate_sensor_output(
            sampler.sample(), self.calibration, select, outputs
        )
        elapsed = time.process_time() - start

        return RunResult(
            mode=ExecutionMode.SINGLE_POINT,
            select=select,
            value=value,
            outputs=outputs,
            cpu_time_seconds=elapsed,
        )

    def run_monte_carlo(
        self,
        n_iterations: int,
        select: OutputSelect = OutputSelect.ALL,
        seed: int | None = None,
    ) -> RunResult:
        """Run N independent sampling + evaluation passes.

        The tracked output of every iteration goes into a buffer of exactly
        N samples. Its mean replaces the reported value. `outputs` holds the
        slots written by the last iteration.

        Args:
            n_iterations: Number of iterations (N >= 1).
            select: Which output(s) to compute.
            seed: Random seed for reproducibility.

        Returns:
            RunResult with samples and mean/variance.
        """
        if n_iterations < 1:
            raise ValueError(f"n_iterations must be >= 1, got {n_iterations}")

        logger.info("Running %d Monte Carlo iterations...", n_iterations)

        sampler = InputSampler(self.ranges, seed=seed)
        outputs = OutputSample()
        samples = np.empty(n_iterations, dtype=float)

        # Timed region covers the whole loop and the statistics step
        start = time.process_time()
        for i in range(n_iterations):
            samples[i] = calculate_sensor_output(
                sampler.sample(), self.calibration, select, outputs
            )
        stats = mean_and_variance(samples)
        elapsed = time.process_time() - start

        logger.info(
            "Completed. Mean: %g, variance: %g, CPU time: %.6f s",
            stats.mean,
            stats.variance,
            elapsed,
        )

        return RunResult(
            mode=ExecutionMode.MONTE_CARLO,
            select=select,
            value=stats.mean,
            outputs=outputs,
            samples=samples,
            statistics=stats,
            cpu_time_seconds=elapsed,
        )
