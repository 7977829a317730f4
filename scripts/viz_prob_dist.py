#!/usr/bin/env python3
"""Plot the distribution of Monte Carlo calibration samples.

Reads a samples file written by `flowcal -M N` (default: data.out) and draws a
histogram with kernel density, mean and the 5th-95th percentile band.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import stats as sp_stats

from flowcal.statistics import mean_and_variance


def main():
    parser = argparse.ArgumentParser(
        description="Generate calibrated output distribution plot"
    )
    parser.add_argument(
        "--samples", default="data.out", help="Path to Monte Carlo samples file"
    )
    parser.add_argument(
        "--label",
        default="Calibrated Differential Pressure [Pa]",
        help="Axis label for the tracked output",
    )
    parser.add_argument("--output", default=None, help="Output file path")
    args = parser.parse_args()

    samples_file = Path(args.samples)
    if not samples_file.exists():
        print(f"Error: Samples file not found: {samples_file}")
        return 1

    df = pd.read_csv(samples_file)
    samples = df["sample"].to_numpy(dtype=float)
    cpu_time_us = int(df["cpu_time_us"].iloc[0]) if len(df) else 0

    stats = mean_and_variance(samples)
    p5, p95 = np.percentile(samples, [5, 95])

    fig, ax = plt.subplots(figsize=(8, 5))

    n_bins = min(50, len(np.unique(samples)))
    ax.hist(
        samples,
        bins=n_bins,
        density=True,
        alpha=0.7,
        color="steelblue",
        edgecolor="white",
        label="Monte Carlo Samples",
    )

    # Add KDE
    if len(np.unique(samples)) > 1:
        kde = sp_stats.gaussian_kde(samples)
        x_range = np.linspace(samples.min(), samples.max(), 200)
        ax.plot(x_range, kde(x_range), "darkblue", linewidth=2, label="Kernel Density")

    ax.axvline(
        x=stats.mean,
        color="orange",
        linestyle="-",
        linewidth=2,
        label=f"Mean ({stats.mean:.1f})",
    )
    ax.axvspan(p5, p95, alpha=0.15, color="yellow", label="90% CI")

    ax.set_xlabel(args.label, fontsize=12)
    ax.set_ylabel("Probability Density", fontsize=12)
    ax.set_title(f"Distribution over {stats.n_samples} iterations", fontsize=14)
    ax.legend(loc="upper right", fontsize=9)
    ax.grid(True, alpha=0.3)

    textstr = f"Std Dev: {stats.std:.2f}\nCPU time: {cpu_time_us} us"
    props = dict(boxstyle="round", facecolor="wheat", alpha=0.7)
    ax.text(
        0.05,
        0.95,
        textstr,
        transform=ax.transAxes,
        fontsize=11,
        verticalalignment="top",
        bbox=props,
    )

    output_path = args.output
    if output_path is None:
        output_path = samples_file.with_name("probability_distribution.png")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    print(f"Saved: {output_path}")
    plt.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
