"""Evaluation harness: solve valve scans in both query modes and record results."""

from __future__ import annotations

import argparse
import json
import os
import platform
import sys
from pathlib import Path
from typing import Iterable

import networkx as nx
import pandas as pd

from valve_release.benchmarks.scan_loader import ValveScan, load_scan, load_scans
from valve_release.benchmarks.synthetic_generator import example_suite, synthetic_suite
from valve_release.routing.distances import reduce_network
from valve_release.solver import MODES, SolveResult, run_mode

ENGINES = ("memoized", "exhaustive")

REQUIRED_COLUMNS = {
    "suite",
    "scan_id",
    "mode",
    "engine",
    "budget",
    "score",
    "runtime_s",
    "repeat",
}

SUMMARY_METRICS = ["score", "runtime_s", "nodes_expanded", "memo_hits"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out", type=Path, default=Path("artifacts"))
    parser.add_argument("--inputs", type=Path, nargs="*", default=[], help="Scan files to solve.")
    parser.add_argument(
        "--input-root",
        type=Path,
        help="Directory of scans (defaults to $VALVE_INPUT_ROOT when --use-input-root is set).",
    )
    parser.add_argument(
        "--use-input-root",
        action="store_true",
        help="Load scans from --input-root or $VALVE_INPUT_ROOT.",
    )
    parser.add_argument("--limit", type=int, help="Maximum scans taken from the input root.")
    parser.add_argument("--selection-seed", type=int, help="Deterministic subset ordering seed.")
    parser.add_argument(
        "--synthetic-tier",
        choices=["small", "medium", "large"],
        help="Add synthetic networks drawn from this topology tier.",
    )
    parser.add_argument("--synthetic-count", type=int, default=4)
    parser.add_argument("--synthetic-seed", type=int, default=0)
    parser.add_argument(
        "--include-example",
        action="store_true",
        help="Always include the published example (implied when no other source is given).",
    )
    parser.add_argument("--modes", nargs="+", choices=list(MODES), default=list(MODES))
    parser.add_argument(
        "--engines",
        nargs="+",
        choices=list(ENGINES),
        default=["memoized"],
        help="Search variants; 'exhaustive' disables the memo table.",
    )
    parser.add_argument("--repeats", type=int, default=1, help="Solve each case this many times.")
    parser.add_argument("--results-name", type=str, default="results.csv")
    parser.add_argument("--summary-name", type=str)
    return parser.parse_args(argv)


def _load_cases(args: argparse.Namespace) -> list[tuple[str, ValveScan]]:
    cases: list[tuple[str, ValveScan]] = []

    def _append_unique(suite: str, entries: Iterable[ValveScan]) -> None:
        seen = {scan.scan_id for _, scan in cases}
        for entry in entries:
            if entry.scan_id in seen:
                continue
            seen.add(entry.scan_id)
            cases.append((suite, entry))

    _append_unique("inputs", [load_scan(path) for path in args.inputs])
    if args.use_input_root or args.input_root is not None:
        _append_unique(
            "input_root",
            load_scans(args.input_root, limit=args.limit, selection_seed=args.selection_seed),
        )
    if args.synthetic_tier:
        _append_unique(
            f"synthetic_{args.synthetic_tier}",
            synthetic_suite(
                args.synthetic_tier, count=args.synthetic_count, seed=args.synthetic_seed
            ),
        )
    if args.include_example or not cases:
        _append_unique("example", example_suite())
    return cases


def _collect_metadata() -> dict[str, object]:
    return {
        "python_version": sys.version,
        "networkx_version": nx.__version__,
        "pandas_version": pd.__version__,
        "platform": platform.platform(),
        "machine": platform.machine(),
        "cpu_count": os.cpu_count(),
    }


def _result_record(
    suite: str, scan: ValveScan, result: SolveResult, *, repeat: int
) -> dict[str, object]:
    record: dict[str, object] = {
        "suite": suite,
        "scan_id": scan.scan_id,
        "path": scan.path.as_posix(),
        "n_valves": len(scan.network),
        "n_flow_valves": len(scan.network.ordinals),
        "repeat": repeat,
    }
    record.update(result.as_record())
    return record


def _validate_results(results_path: Path) -> None:
    if not results_path.exists():
        msg = f"Missing results file: {results_path}"
        raise FileNotFoundError(msg)

    df = pd.read_csv(results_path)
    missing = sorted(col for col in REQUIRED_COLUMNS if col not in df.columns)
    if missing:
        msg = f"results.csv missing columns: {missing}"
        raise ValueError(msg)


def _write_summary(df: pd.DataFrame, summary_path: Path) -> None:
    agg = df.groupby(["scan_id", "mode", "engine"]).agg(
        {m: ["mean", "std"] for m in SUMMARY_METRICS}
    )
    agg.columns = [f"{metric}_{stat}" for metric, stat in agg.columns]
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    agg.reset_index().to_csv(summary_path, index=False)


def run_cases(
    cases: Iterable[tuple[str, ValveScan]],
    *,
    modes: Iterable[str] = MODES,
    engines: Iterable[str] = ("memoized",),
    repeats: int = 1,
) -> pd.DataFrame:
    """Solve every case and return one row per scan x mode x engine x repeat."""
    modes = list(modes)
    engines = list(engines)
    records: list[dict[str, object]] = []
    for suite, scan in cases:
        distances = reduce_network(scan.network)
        for engine in engines:
            for repeat in range(max(1, repeats)):
                for mode in modes:
                    result = run_mode(
                        scan.network,
                        mode,
                        distances=distances,
                        memoize=engine == "memoized",
                    )
                    records.append(_result_record(suite, scan, result, repeat=repeat))
                    print(
                        f"[eval] {scan.scan_id} {mode}/{engine}: score={result.score} "
                        f"({result.runtime_s:.3f}s)"
                    )
    return pd.DataFrame(records)


# ----------------------------------------------------------------------- Main
def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    out_dir = args.out.expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        cases = _load_cases(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"[eval] {exc}")
        return 1

    df = run_cases(cases, modes=args.modes, engines=args.engines, repeats=args.repeats)
    results_path = out_dir / args.results_name
    df.to_csv(results_path, index=False)

    summary_name = args.summary_name or args.results_name.replace("results", "summary")
    if summary_name == args.results_name:
        summary_name = f"summary_{args.results_name}"
    summary_path = out_dir / summary_name
    _write_summary(df, summary_path)

    metadata_path = out_dir / "metadata.json"
    metadata = _collect_metadata()
    metadata.update(
        {
            "scans": [scan.scan_id for _, scan in cases],
            "modes": args.modes,
            "engines": args.engines,
            "repeats": args.repeats,
            "synthetic_tier": args.synthetic_tier,
            "synthetic_seed": args.synthetic_seed,
        }
    )
    metadata_path.write_text(json.dumps(metadata, indent=2))

    _validate_results(results_path)
    print(f"Wrote {len(df)} rows to {results_path}")
    print(f"Wrote summary to {summary_path}")
    print(f"Wrote metadata to {metadata_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
