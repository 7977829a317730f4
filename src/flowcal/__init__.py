"""Flow sensor calibration: single-point and Monte Carlo evaluation."""

from .config.settings import ExecutionMode, OutputSelect, RunSettings
from .entities import (
    CalibrationConstants,
    InputRanges,
    InputSample,
    MeanAndVariance,
    OutputSample,
    RunResult,
    UniformRange,
)
from .model import calculate_sensor_output, differential_pressure, mass_flow
from .simulation import CalibrationEngine, InputSampler
from .statistics import mean_and_variance, probability_summary

__version__ = "0.1.0"

__all__ = [
    "ExecutionMode",
    "OutputSelect",
    "RunSettings",
    "CalibrationConstants",
    "InputRanges",
    "InputSample",
    "MeanAndVariance",
    "OutputSample",
    "RunResult",
    "UniformRange",
    "calculate_sensor_output",
    "differential_pressure",
    "mass_flow",
    "CalibrationEngine",
    "InputSampler",
    "mean_and_variance",
    "probability_summary",
]
