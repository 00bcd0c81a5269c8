"""Invariant checks on eval results (determinism, non-negative scores, schema)."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

import pandas as pd

from valve_release.solver import MODES

REQUIRED = ["scan_id", "mode", "engine", "score"]


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--results", type=Path, required=True, help="Path to results.csv.")
    parser.add_argument(
        "--out",
        type=Path,
        help="Output directory (defaults to results parent / invariants).",
    )
    return parser.parse_args(argv)


def _schema(df: pd.DataFrame) -> list[dict]:
    missing = [col for col in REQUIRED if col not in df.columns]
    if missing:
        return [{"type": "schema", "detail": f"missing columns {missing}"}]
    unknown = sorted(set(df["mode"]) - set(MODES))
    if unknown:
        return [{"type": "schema", "detail": f"unknown modes {unknown}"}]
    return []


def _determinism(df: pd.DataFrame) -> list[dict]:
    """Every engine and repeat must agree on the score of a scan/mode pair."""
    issues = []
    for key, group in df.groupby(["scan_id", "mode"]):
        scores = group["score"].dropna()
        if scores.empty:
            continue
        if scores.max() != scores.min():
            issues.append(
                {
                    "type": "determinism",
                    "key": list(key),
                    "scores": sorted(int(s) for s in scores.unique()),
                }
            )
    return issues


def _score_sanity(df: pd.DataFrame) -> list[dict]:
    issues = []
    bad = df[df["score"].isna() | (df["score"] < 0)]
    for _, row in bad.iterrows():
        issues.append(
            {
                "type": "score_sanity",
                "scan_id": row["scan_id"],
                "mode": row["mode"],
                "engine": row["engine"],
                "detail": "missing or negative score",
            }
        )
    return issues


def _summarize(issues: Iterable[dict]) -> dict:
    issues_list = list(issues)
    grouped: dict[str, int] = {}
    for item in issues_list:
        grouped[item["type"]] = grouped.get(item["type"], 0) + 1
    return {"issues": issues_list, "counts": grouped, "passed": len(issues_list) == 0}


def _write_report(out_dir: Path, summary: dict) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    report_lines = ["# Invariants Report", ""]
    if summary["passed"]:
        report_lines.append("- All invariants passed.")
    else:
        report_lines.append(f"- Issues found: {summary['counts']}")
        for issue in summary["issues"]:
            parts = [issue["type"]]
            for key, val in issue.items():
                if key == "type":
                    continue
                parts.append(f"{key}={val}")
            report_lines.append(f"  - {'; '.join(parts)}")
    (out_dir / "report.md").write_text("\n".join(report_lines))
    (out_dir / "summary.json").write_text(json.dumps(summary, indent=2))


def check_results(df: pd.DataFrame) -> dict:
    """Run every check on an in-memory results frame."""
    issues = _schema(df)
    if not issues:
        issues.extend(_determinism(df))
        issues.extend(_score_sanity(df))
    return _summarize(issues)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    results_path = args.results.expanduser()
    if not results_path.exists():
        print(f"[invariants] missing results: {results_path}")
        return 1
    out_dir = args.out or results_path.parent / "invariants"
    summary = check_results(pd.read_csv(results_path))
    _write_report(out_dir, summary)
    print(f"[invariants] wrote report to {out_dir}")
    return 0 if summary["passed"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
