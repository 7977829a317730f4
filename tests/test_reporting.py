"""Report formatting and file output tests."""

import json
import re

import numpy as np
import pandas as pd
import pytest

from flowcal.config.settings import ExecutionMode, OutputSelect
from flowcal.entities import MeanAndVariance, OutputSample, RunResult
from flowcal import reporting

LABELS = [("Calibrated Mass Flow", "sccm"), ("Calibrated Differential Pressure", "Pa")]
BANDS = [0.01, 0.05]


@pytest.fixture
def single_all():
    return RunResult(
        mode=ExecutionMode.SINGLE_POINT,
        select=OutputSelect.ALL,
        value=2660.0,
        outputs=OutputSample(mass_flow=2600.0, differential_pressure=2660.0),
        cpu_time_seconds=0.000012,
    )


@pytest.fixture
def monte_carlo_mass_flow():
    samples = np.array([2590.0, 2600.0, 2610.0, 2700.0])
    return RunResult(
        mode=ExecutionMode.MONTE_CARLO,
        select=OutputSelect.MASS_FLOW,
        value=float(np.mean(samples)),
        outputs=OutputSample(mass_flow=2700.0),
        samples=samples,
        statistics=MeanAndVariance(
            mean=float(np.mean(samples)), variance=float(np.var(samples)), n_samples=4
        ),
        cpu_time_seconds=0.25,
    )


class TestTextReport:
    def test_all_outputs_listed(self, single_all):
        text = reporting.format_text_report(single_all, LABELS, BANDS)
        assert "Calibrated Mass Flow: 2600.000000 sccm" in text
        assert "Calibrated Differential Pressure: 2660.000000 Pa" in text
        assert "Pr(" not in text

    def test_monte_carlo_summary(self, monte_carlo_mass_flow):
        text = reporting.format_text_report(monte_carlo_mass_flow, LABELS, BANDS)
        lines = text.splitlines()

        # Reported value is the mean, not the last iteration
        assert lines[0] == "Calibrated Mass Flow: 2625.000000 sccm"
        assert "Monte Carlo mean over 4 iterations" in text
        assert text.count("Pr(") == len(BANDS)
        assert "5th / 95th percentile" in text
        assert "Differential Pressure" not in text


class TestJsonReport:
    def test_single_point_all(self, single_all):
        report = json.loads(reporting.format_json_report(single_all, LABELS))
        assert report["mode"] == "single-point"
        assert report["select"] == "ALL"
        assert [o["value"] for o in report["outputs"]] == [2600.0, 2660.0]
        assert report["monte_carlo"] is None

    def test_monte_carlo(self, monte_carlo_mass_flow):
        report = reporting.build_json_report(monte_carlo_mass_flow, LABELS)
        assert report["outputs"] == [
            {"name": "Calibrated Mass Flow", "unit": "sccm", "value": 2625.0}
        ]
        assert report["monte_carlo"]["iterations"] == 4
        assert report["monte_carlo"]["samples"] == [2590.0, 2600.0, 2610.0, 2700.0]

    def test_unwritten_slot_is_null(self):
        result = RunResult(
            mode=ExecutionMode.SINGLE_POINT,
            select=OutputSelect.ALL,
            value=float("inf"),
            outputs=OutputSample(mass_flow=2600.0, differential_pressure=float("inf")),
        )
        report = json.loads(reporting.format_json_report(result, LABELS))
        assert report["outputs"][1]["value"] is None


class TestLines:
    def test_benchmark_line(self, monte_carlo_mass_flow):
        line = reporting.format_benchmark_line(monte_carlo_mass_flow)
        assert re.fullmatch(r"2625\.000000 250000", line)

    def test_timing_line(self, single_all):
        assert reporting.format_timing_line(single_all) == "\nCPU time used: 0.000012 seconds"


class TestFiles:
    def test_outputs_csv(self, tmp_path, single_all):
        path = reporting.write_outputs_csv(tmp_path / "sub" / "out.csv", single_all, LABELS)
        df = pd.read_csv(path)
        assert list(df.columns) == ["Calibrated Mass Flow", "Calibrated Differential Pressure"]
        assert df.iloc[0].tolist() == [2600.0, 2660.0]

    def test_samples_file(self, tmp_path, monte_carlo_mass_flow):
        path = reporting.write_samples_file(tmp_path / "data.out", monte_carlo_mass_flow)
        df = pd.read_csv(path)
        assert df["sample"].tolist() == [2590.0, 2600.0, 2610.0, 2700.0]
        assert set(df["cpu_time_us"]) == {250000}

    def test_samples_file_requires_monte_carlo(self, tmp_path, single_all):
        with pytest.raises(ValueError):
            reporting.write_samples_file(tmp_path / "data.out", single_all)
