"""Configuration package for the flow sensor calibration model."""

from .settings import (
    ExecutionMode,
    OutputSelect,
    RunSettings,
)

__all__ = [
    "ExecutionMode",
    "OutputSelect",
    "RunSettings",
]
