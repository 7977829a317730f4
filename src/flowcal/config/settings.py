"""
Run settings for the flow sensor calibration model.

This module contains runtime-configurable settings that may change between runs
(execution mode, output selection, reporting switches).

All calibration constants and input distribution ranges are in
config/constants.yaml.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any


class OutputSelect(IntEnum):
    """Which calibrated output(s) to compute.

    The integer values double as indices into the output array; ALL equals
    the number of outputs.
    """

    MASS_FLOW = 0
    DIFFERENTIAL_PRESSURE = 1
    ALL = 2


class ExecutionMode(Enum):
    """Execution modes, selected once at start."""

    SINGLE_POINT = "single-point"
    MONTE_CARLO = "monte-carlo"


@dataclass
class RunSettings:
    """
    Runtime configuration for a single calibration run.

    `n_iterations` is the number of Monte Carlo iterations; it must be 1 in
    single-point mode.
    """

    mode: ExecutionMode
    select: OutputSelect
    n_iterations: int = 1
    seed: int | None = None
    timing_enabled: bool = False
    benchmarking: bool = False
    json_output: bool = False
    output_path: Path | None = None
    samples_path: Path | None = None

    def __post_init__(self):
        _validate_required(self, "mode", self.mode, ExecutionMode)
        _validate_required(self, "select", self.select, OutputSelect)
        _validate_required(self, "n_iterations", self.n_iterations, int)
        _validate_positive(self, "n_iterations", self.n_iterations)
        if self.mode is ExecutionMode.SINGLE_POINT and self.n_iterations != 1:
            raise ValueError(
                f"{self.__class__.__name__}.n_iterations must be 1 in single-point mode, "
                f"got {self.n_iterations}"
            )

        # Coerce paths if given as strings
        if isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        if isinstance(self.samples_path, str):
            self.samples_path = Path(self.samples_path)

    @property
    def is_monte_carlo(self) -> bool:
        return self.mode is ExecutionMode.MONTE_CARLO


def _validate_required(
    obj: Any, field_name: str, value: Any, expected_type: type
) -> None:
    """Validate that a required field is provided and has correct type."""
    if value is None:
        raise ValueError(
            f"{obj.__class__.__name__}.{field_name} is REQUIRED and was not provided"
        )
    # bool is an int subclass; reject it for numeric fields
    if not isinstance(value, expected_type) or (
        expected_type is int and isinstance(value, bool)
    ):
        raise TypeError(
            f"{obj.__class__.__name__}.{field_name} must be {expected_type.__name__}, "
            f"got {type(value).__name__}"
        )


def _validate_positive(obj: Any, field_name: str, value: float | int) -> None:
    """Validate that a numeric field is positive."""
    if value <= 0:
        raise ValueError(
            f"{obj.__class__.__name__}.{field_name} must be positive, got {value}"
        )
