"""Plotting utilities for release evaluation."""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd

matplotlib.use("Agg")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--in", dest="input", type=Path, required=True, help="Input results CSV.")
    parser.add_argument("--out", dest="out", type=Path, required=True, help="Output directory.")
    return parser.parse_args(argv)


def _barplots(df: pd.DataFrame, metric: str, ylabel: str, fname: str, out_dir: Path) -> None:
    modes = sorted(df["mode"].unique())
    series = sorted(df["engine"].unique())
    num_modes = len(modes)
    fig, axes = plt.subplots(1, num_modes, figsize=(5 * num_modes, 4), sharey=False)
    if num_modes == 1:
        axes = [axes]
    palette = plt.get_cmap("tab10")
    width = 0.8 / max(1, len(series))
    for ax, mode in zip(axes, modes):
        subset = df[df["mode"] == mode]
        scans = sorted(subset["scan_id"].unique())
        for idx, engine in enumerate(series):
            stats = (
                subset[subset["engine"] == engine]
                .groupby("scan_id")[metric]
                .agg(["mean", "std"])
                .reindex(scans)
            )
            offsets = [pos + idx * width for pos in range(len(scans))]
            ax.bar(
                offsets,
                stats["mean"].fillna(0.0),
                width=width,
                yerr=stats["std"].fillna(0.0),
                color=palette(idx % 10),
                label=engine,
            )
        ax.set_xticks([pos + width * (len(series) - 1) / 2 for pos in range(len(scans))])
        ax.set_xticklabels(scans, rotation=45, ha="right")
        ax.set_title(mode)
        ax.set_ylabel(ylabel)
        ax.legend()
    fig.tight_layout()
    out_dir.mkdir(parents=True, exist_ok=True)
    for ext in ("png", "pdf"):
        fig.savefig(out_dir / f"{fname}.{ext}", dpi=200)
    plt.close(fig)


def _effort_scatter(df: pd.DataFrame, out_dir: Path) -> None:
    if "nodes_expanded" not in df.columns:
        return
    palette = plt.get_cmap("tab10")
    fig, ax = plt.subplots(figsize=(6, 5))
    for idx, (engine, subset) in enumerate(df.groupby("engine")):
        ax.scatter(
            subset["n_flow_valves"],
            subset["nodes_expanded"],
            label=engine,
            color=palette(idx % 10),
            s=60,
        )
    ax.set_xlabel("Flow-bearing valves")
    ax.set_ylabel("Frames expanded")
    ax.set_yscale("log")
    ax.legend()
    fig.tight_layout()
    out_dir.mkdir(parents=True, exist_ok=True)
    for ext in ("png", "pdf"):
        fig.savefig(out_dir / f"search_effort.{ext}", dpi=200)
    plt.close(fig)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    df = pd.read_csv(args.input)
    out_dir = args.out

    _barplots(df, "score", "Pressure released", "score_comparison", out_dir)
    _barplots(df, "runtime_s", "Search runtime (s)", "runtime_comparison", out_dir)
    _effort_scatter(df, out_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
