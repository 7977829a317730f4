"""
Flow sensor calibration model.

Converts one set of raw sensor inputs into calibrated outputs:

    m  = C3 * h^3 + C2 * h^2 + C1                (mass flow [sccm])
    dp = m * (Tflow / T0) * (P0 / Pflow)         (differential pressure [Pa])

Preconditions:
    T0 and Pflow must be strictly positive (their sampling ranges guarantee
    this). Arithmetic is unchecked: a zero divisor or a NaN input propagates
    as inf/NaN into the outputs instead of raising.
"""

from __future__ import annotations

import numpy as np

from .config.settings import OutputSelect
from .entities import CalibrationConstants, InputSample, OutputSample


def mass_flow(h: float, constants: CalibrationConstants) -> float:
    """Cubic calibration polynomial in heat power transfer."""
    h = np.float64(h)
    with np.errstate(all="ignore"):
        return float(constants.c3 * h**3 + constants.c2 * h**2 + constants.c1)


def differential_pressure(
    m: float, tflow: float, t0: float, pflow: float, p0: float
) -> float:
    """Temperature/pressure ratio correction of a mass flow value."""
    with np.errstate(all="ignore"):
        return float(
            np.float64(m) * (np.float64(tflow) / t0) * (np.float64(p0) / pflow)
        )


def calculate_sensor_output(
    inputs: InputSample,
    constants: CalibrationConstants,
    select: OutputSelect,
    outputs: OutputSample,
) -> float:
    """
    Evaluate the calibration for one input sample.

    Writes each requested output into `outputs` and returns the value for the
    requested selector. When both outputs are requested (OutputSelect.ALL) the
    returned value is the differential pressure.

    Args:
        inputs: Raw sensor inputs.
        constants: Calibration polynomial coefficients.
        select: Which output(s) to compute.
        outputs: Output slots to write into; unrequested slots are untouched.

    Returns:
        The calibrated value of the tracked output.
    """
    calculate_all = select is OutputSelect.ALL

    # Mass flow is common to both outputs
    m = mass_flow(inputs.hxfer, constants)
    value = m

    if calculate_all or select is OutputSelect.MASS_FLOW:
        outputs.mass_flow = m

    if calculate_all or select is OutputSelect.DIFFERENTIAL_PRESSURE:
        value = differential_pressure(
            m, inputs.tflow, inputs.t0, inputs.pflow, inputs.p0
        )
        outputs.differential_pressure = value

    return value


def evaluate(
    inputs: InputSample,
    constants: CalibrationConstants,
    select: OutputSelect = OutputSelect.ALL,
) -> tuple[float, OutputSample]:
    """Evaluate into a fresh OutputSample and return (tracked value, outputs)."""
    outputs = OutputSample()
    value = calculate_sensor_output(inputs, constants, select, outputs)
    return value, outputs
