"""Random generators for the Monte Carlo calibration runs."""

from __future__ import annotations

import numpy as np

from ..entities import InputRanges, InputSample, UniformRange


class InputSampler:
    """Draws independent uniform samples of the five sensor inputs.

    Each call to `sample` returns a fresh draw; constructing a new sampler
    with the same seed restarts the stream.
    """

    def __init__(self, ranges: InputRanges, seed: int | None = None):
        self.ranges = ranges
        self.rng = np.random.default_rng(seed)

    def _uniform(self, bounds: UniformRange) -> float:
        # Generator.uniform samples [low, high); a degenerate range returns low
        return float(self.rng.uniform(bounds.low, bounds.high))

    def sample(self) -> InputSample:
        """Sample one input set, each field from its own range."""
        return InputSample(
            hxfer=self._uniform(self.ranges.hxfer),
            tflow=self._uniform(self.ranges.tflow),
            t0=self._uniform(self.ranges.t0),
            pflow=self._uniform(self.ranges.pflow),
            p0=self._uniform(self.ranges.p0),
        )
