#!/usr/bin/env python3
"""
Flow Sensor Calibration - Main Entry Point.

Usage:
    flowcal                              # Single evaluation, all outputs
    flowcal -S 0                         # Mass flow only
    flowcal -S 1 -M 10000                # Differential pressure, 10000 Monte Carlo iterations
    flowcal -M 10000 -T                  # Print CPU time used
    flowcal -M 10000 -b                  # Benchmark line: "<value> <microseconds>"
    flowcal -j                           # JSON output
    flowcal -o results/outputs.csv       # Also write output values to CSV
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config.settings import ExecutionMode, OutputSelect, RunSettings
from .entities import RunResult
from .simulation.engine import CalibrationEngine
from . import reporting
from . import utils

logger = logging.getLogger("flowcal")

DEFAULT_SAMPLES_FILE = "data.out"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="flowcal",
        description="Flow sensor calibration (mass flow / differential pressure)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Output select values:
  0  Calibrated Mass Flow (sccm)
  1  Calibrated Differential Pressure (Pa)
  2  All outputs (default)
        """,
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write output values to this CSV file",
    )

    parser.add_argument(
        "-S",
        "--select-output",
        type=int,
        choices=[int(s) for s in OutputSelect],
        default=int(OutputSelect.ALL),
        help="Output to compute (default: 2 = all)",
    )

    parser.add_argument(
        "-M",
        "--multiple-executions",
        type=int,
        default=None,
        metavar="N",
        help="Run in Monte Carlo mode with N iterations",
    )

    parser.add_argument(
        "-T",
        "--time",
        action="store_true",
        help="Print CPU time used",
    )

    parser.add_argument(
        "-b",
        "--benchmarking",
        action="store_true",
        help='Benchmark mode: print only "<value> <CPU time in microseconds>"',
    )

    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    parser.add_argument(
        "--samples-output",
        type=str,
        default=DEFAULT_SAMPLES_FILE,
        help=f"Monte Carlo samples file (default: {DEFAULT_SAMPLES_FILE})",
    )

    parser.add_argument(
        "--no-samples-output",
        action="store_true",
        help="Do not write the Monte Carlo samples file",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: fresh entropy)",
    )

    parser.add_argument(
        "--constants",
        type=str,
        default=None,
        help="Path to constants.yaml file (default: config/constants.yaml)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def create_settings(args: argparse.Namespace) -> RunSettings:
    """
    Create RunSettings from command line arguments.

    Monte Carlo mode is selected when -M/--multiple-executions is given.

    Raises:
        ValueError: If the iteration count is not positive
    """
    if args.multiple_executions is not None:
        mode = ExecutionMode.MONTE_CARLO
        n_iterations = args.multiple_executions
    else:
        mode = ExecutionMode.SINGLE_POINT
        n_iterations = 1

    samples_path = None
    if mode is ExecutionMode.MONTE_CARLO and not args.no_samples_output:
        samples_path = Path(args.samples_output)

    return RunSettings(
        mode=mode,
        select=OutputSelect(args.select_output),
        n_iterations=n_iterations,
        seed=args.seed,
        timing_enabled=args.time,
        benchmarking=args.benchmarking,
        json_output=args.json,
        output_path=Path(args.output) if args.output else None,
        samples_path=samples_path,
    )


def render_report(
    result: RunResult,
    settings: RunSettings,
    labels: Sequence[tuple[str, str]],
    bands: Sequence[float],
) -> str:
    """Render the stdout report for a finished run."""
    if settings.benchmarking:
        return reporting.format_benchmark_line(result)

    if settings.json_output:
        text = reporting.format_json_report(result, labels)
    else:
        text = reporting.format_text_report(result, labels, bands)

    if settings.timing_enabled:
        text += "\n" + reporting.format_timing_line(result)
    return text


def run_pipeline(
    settings: RunSettings,
    constants_path: Path | str | None = None,
    verbose: bool = False,
    out=None,
) -> RunResult:
    """
    Run the complete calibration pipeline.

    Args:
        settings: Run settings (REQUIRED)
        constants_path: Path to constants YAML file (default: bundled constants)
        verbose: Report unused configuration parameters
        out: Stream for the report (default: sys.stdout)

    Returns:
        RunResult of the engine run

    Raises:
        ValueError: If settings are missing or constants are invalid
    """
    if settings is None:
        raise ValueError("settings is REQUIRED")
    out = sys.stdout if out is None else out

    constants = utils.load_constants_from_file(constants_path)
    utils.validate_constants(constants)

    logger.info(
        "Mode: %s, output: %s, iterations: %d",
        settings.mode.value,
        settings.select.name,
        settings.n_iterations,
    )

    engine = CalibrationEngine.from_config(constants)
    labels = utils.get_output_labels(constants)
    bands = utils.get_probability_bands(constants)

    result = engine.run(settings)

    print(render_report(result, settings, labels, bands), file=out)

    # File outputs are skipped in benchmarking mode
    if not settings.benchmarking and settings.output_path is not None:
        reporting.write_outputs_csv(settings.output_path, result, labels)

    if settings.is_monte_carlo and settings.samples_path is not None:
        reporting.write_samples_file(settings.samples_path, result)

    if verbose:
        logger.info("Checking for unused configuration parameters...")
        constants.report_unused()

    return result


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
    )

    try:
        settings = create_settings(args)
        run_pipeline(
            settings=settings,
            constants_path=args.constants,
            verbose=args.verbose,
        )
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (ValueError, KeyError, TypeError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 3
    except OSError as e:
        print(f"Output error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
