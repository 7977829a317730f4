from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .config.settings import OutputSelect
from .entities import INPUT_FIELDS

logger = logging.getLogger("flowcal.config")

# =============================================================================
# Constants
# =============================================================================

DEFAULT_CONSTANTS_PATH = Path(__file__).parent / "config" / "constants.yaml"

REQUIRED_CONSTANT_SECTIONS = [
    "calibration",
    "input_distributions",
    "outputs",
]

REQUIRED_CALIBRATION_KEYS = ["c1", "c2", "c3"]
REQUIRED_RANGE_KEYS = ["low", "high"]
REQUIRED_OUTPUT_KEYS = ["name", "unit"]

DEFAULT_PROBABILITY_BANDS = [0.01, 0.05, 0.10]


# =============================================================================
# Config Tracker Classes
# =============================================================================


class ConfigTracker(dict):
    """
    Configuration mapping that records which keys were read.

    Nested mappings are wrapped on access so their keys are tracked too.
    Lists are returned as-is; reading a list key marks it used as a whole.
    """

    def __init__(self, data: dict[str, Any], path: str = ""):
        super().__init__(data)
        self._path = path
        self._accessed: set[str] = set()
        self._children: dict[str, ConfigTracker] = {}

    def __getitem__(self, key: str) -> Any:
        self._accessed.add(key)
        if key in self._children:
            return self._children[key]

        val = super().__getitem__(key)
        if isinstance(val, dict):
            tracker = ConfigTracker(val, f"{self._path}.{key}" if self._path else key)
            self._children[key] = tracker
            return tracker
        return val

    def get(self, key: str, default: Any = None) -> Any:
        if key in self:
            return self[key]
        self._accessed.add(key)
        return default

    def report_unused(self) -> list[str]:
        """Log unused parameters and return their dotted paths."""
        unused = sorted(self._collect_unused())
        for path in unused:
            logger.warning("Configuration parameter was NOT used: %s", path)
        return unused

    def _collect_unused(self) -> list[str]:
        unused = []
        for key in self:
            if key not in self._accessed:
                unused.append(f"{self._path}.{key}" if self._path else str(key))
            elif key in self._children:
                unused.extend(self._children[key]._collect_unused())
        return unused


# =============================================================================
# Loading & Validation
# =============================================================================


def load_constants_from_file(path: Path | str | None = None) -> ConfigTracker:
    """Load constants from YAML file and wrap with tracker."""
    path = DEFAULT_CONSTANTS_PATH if path is None else Path(path)
    if not path.exists():
        # Try relative to this file
        path = Path(__file__).parent / path
    if not path.exists():
        raise FileNotFoundError(f"Constants file not found: {path}")
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ValueError(f"Constants file is empty: {path}")
    if not isinstance(data, dict):
        raise ValueError(f"Constants file must contain a mapping: {path}")

    logger.info("Loaded constants from %s", path)
    return ConfigTracker(data)


def validate_constants(constants: ConfigTracker | dict[str, Any]) -> None:
    """
    Validate that all required keys are present in constants.

    Raises:
        KeyError: If required key is missing
        ValueError: If value has invalid type or range
    """
    for section in REQUIRED_CONSTANT_SECTIONS:
        if section not in constants:
            raise KeyError(f"Missing required section in constants.yaml: '{section}'")

    # Membership checks use the raw dicts so validation does not count as use
    calibration = dict.get(constants, "calibration")
    for key in REQUIRED_CALIBRATION_KEYS:
        if key not in calibration:
            raise KeyError(
                f"Missing required key in constants.yaml calibration: '{key}'"
            )
        _require_number(f"calibration.{key}", dict.get(calibration, key))

    dists = dict.get(constants, "input_distributions")
    for name in INPUT_FIELDS:
        if name not in dists:
            raise KeyError(
                f"Missing required input distribution in constants.yaml: '{name}'"
            )
        bounds = dict.get(dists, name)
        for key in REQUIRED_RANGE_KEYS:
            if key not in bounds:
                raise KeyError(
                    f"Missing required key in constants.yaml input_distributions.{name}: '{key}'"
                )
            _require_number(f"input_distributions.{name}.{key}", dict.get(bounds, key))
        if float(dict.get(bounds, "low")) > float(dict.get(bounds, "high")):
            raise ValueError(
                f"input_distributions.{name}: low must not exceed high, "
                f"got [{dict.get(bounds, 'low')}, {dict.get(bounds, 'high')}]"
            )

    outputs = dict.get(constants, "outputs")
    if not isinstance(outputs, list) or len(outputs) != int(OutputSelect.ALL):
        raise ValueError(
            f"constants.yaml outputs must list exactly {int(OutputSelect.ALL)} entries"
        )
    for i, entry in enumerate(outputs):
        for key in REQUIRED_OUTPUT_KEYS:
            if key not in entry:
                raise KeyError(f"Missing required key in constants.yaml outputs[{i}]: '{key}'")


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"constants.yaml {name} must be a number, got {value!r}")


# =============================================================================
# Accessors
# =============================================================================


def get_output_labels(
    constants: ConfigTracker | dict[str, Any],
) -> list[tuple[str, str]]:
    """Return (name, unit) per output, indexed by OutputSelect."""
    return [(str(o["name"]), str(o["unit"])) for o in constants["outputs"]]


def get_probability_bands(constants: ConfigTracker | dict[str, Any]) -> list[float]:
    """Relative bands for the probability summary (defaults if not configured)."""
    reporting = constants.get("reporting") or {}
    bands = reporting.get("probability_bands", DEFAULT_PROBABILITY_BANDS)
    return [float(b) for b in bands]
