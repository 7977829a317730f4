"""
Entity definitions for the flow sensor calibration model.

Calibration constants and input ranges are immutable and passed explicitly
into the sampler and the evaluator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from .config.settings import ExecutionMode, OutputSelect


# =============================================================================
# Inputs
# =============================================================================

INPUT_FIELDS = ("hxfer", "tflow", "t0", "pflow", "p0")


@dataclass(frozen=True)
class InputSample:
    """One draw of the five raw sensor inputs.

    Attributes:
        hxfer: Heat power transfer [W]
        tflow: Flow temperature [K]
        t0: Reference temperature [K]
        pflow: Flow pressure [Pa]
        p0: Reference pressure [Pa]
    """

    hxfer: float
    tflow: float
    t0: float
    pflow: float
    p0: float


@dataclass(frozen=True)
class UniformRange:
    """Closed interval [low, high] of a uniform input distribution."""

    low: float
    high: float

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(
                f"UniformRange low must not exceed high, got [{self.low}, {self.high}]"
            )

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.low + self.high)

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class InputRanges:
    """Per-field uniform ranges for the sampler."""

    hxfer: UniformRange = UniformRange(0.010, 0.050)
    tflow: UniformRange = UniformRange(293.0, 294.0)
    t0: UniformRange = UniformRange(273.0, 273.5)
    pflow: UniformRange = UniformRange(420000.0, 425000.0)
    p0: UniformRange = UniformRange(400000.0, 405000.0)

    @classmethod
    def from_config(cls, constants: dict[str, Any]) -> "InputRanges":
        """Load from constants.yaml input_distributions section."""
        dists = constants["input_distributions"]
        return cls(
            **{
                name: UniformRange(
                    low=float(dists[name]["low"]), high=float(dists[name]["high"])
                )
                for name in INPUT_FIELDS
            }
        )

    def midpoint_sample(self) -> InputSample:
        """Input sample at the center of every range."""
        return InputSample(**{name: getattr(self, name).midpoint for name in INPUT_FIELDS})


# =============================================================================
# Calibration
# =============================================================================


@dataclass(frozen=True)
class CalibrationConstants:
    """Mass-flow polynomial coefficients: m = c3*h^3 + c2*h^2 + c1."""

    c1: float = 2499.26
    c2: float = 117682.20
    c3: float = -314364.00

    @classmethod
    def from_config(cls, constants: dict[str, Any]) -> "CalibrationConstants":
        """Load from constants.yaml calibration section."""
        cal = constants["calibration"]
        return cls(c1=float(cal["c1"]), c2=float(cal["c2"]), c3=float(cal["c3"]))


# =============================================================================
# Outputs
# =============================================================================


@dataclass
class OutputSample:
    """Calibrated outputs of one evaluation.

    Slots that were not requested by the output selector stay NaN.
    """

    mass_flow: float = math.nan
    differential_pressure: float = math.nan

    def as_list(self) -> list[float]:
        return [self.mass_flow, self.differential_pressure]


@dataclass(frozen=True)
class MeanAndVariance:
    """Summary of a sample set."""

    mean: float
    variance: float
    n_samples: int

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)


@dataclass
class RunResult:
    """Result of one engine run (single point or Monte Carlo)."""

    mode: ExecutionMode
    select: OutputSelect
    value: float
    outputs: OutputSample
    samples: np.ndarray | None = None
    statistics: MeanAndVariance | None = None
    cpu_time_seconds: float = 0.0

    @property
    def cpu_time_us(self) -> int:
        return int(self.cpu_time_seconds * 1_000_000)
