"""Sampling and execution package for calibration runs."""

from .stochastics import InputSampler
from .engine import CalibrationEngine

__all__ = ["InputSampler", "CalibrationEngine"]
