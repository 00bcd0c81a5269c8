"""Regression gate: the memoized engine must match the exhaustive reference."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

import pandas as pd


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--results", type=Path, required=True, help="Path to results CSV.")
    parser.add_argument("--candidate", type=str, default="memoized")
    parser.add_argument("--reference", type=str, default="exhaustive")
    parser.add_argument(
        "--scans",
        type=str,
        nargs="*",
        help="Optional list of scan_ids to check (defaults to all in results).",
    )
    parser.add_argument(
        "--require-reference",
        action="store_true",
        help="Fail if the reference engine is missing for any scan/mode.",
    )
    parser.add_argument(
        "--expected",
        type=str,
        nargs="*",
        default=[],
        metavar="SCAN:MODE=SCORE",
        help="Known answers, e.g. example:single=1651.",
    )
    return parser.parse_args(argv)


def _parse_expected(items: Iterable[str]) -> dict[tuple[str, str], int]:
    expected: dict[tuple[str, str], int] = {}
    for item in items:
        try:
            key, score = item.split("=", 1)
            scan_id, mode = key.rsplit(":", 1)
            expected[(scan_id, mode)] = int(score)
        except ValueError as exc:
            msg = f"Bad expected entry {item!r}; use SCAN:MODE=SCORE"
            raise ValueError(msg) from exc
    return expected


def _engine_failures(
    df: pd.DataFrame,
    *,
    candidate: str,
    reference: str,
    scans: Iterable[str],
    require_reference: bool,
) -> list[str]:
    failures: list[str] = []
    for scan_id in scans:
        for mode in sorted(df.loc[df["scan_id"] == scan_id, "mode"].unique()):
            rows = df[(df["scan_id"] == scan_id) & (df["mode"] == mode)]
            cand = rows[rows["engine"] == candidate]
            ref = rows[rows["engine"] == reference]
            if cand.empty:
                failures.append(f"{scan_id}/{mode}: missing {candidate} results")
                continue
            if ref.empty:
                if require_reference:
                    failures.append(f"{scan_id}/{mode}: missing {reference} results")
                continue
            cand_scores = sorted({int(s) for s in cand["score"]})
            ref_scores = sorted({int(s) for s in ref["score"]})
            if len(cand_scores) > 1 or cand_scores != ref_scores:
                failures.append(
                    f"{scan_id}/{mode}: {candidate} {cand_scores} != {reference} {ref_scores}"
                )
    return failures


def _expected_failures(df: pd.DataFrame, expected: dict[tuple[str, str], int]) -> list[str]:
    failures: list[str] = []
    for (scan_id, mode), score in sorted(expected.items()):
        rows = df[(df["scan_id"] == scan_id) & (df["mode"] == mode)]
        if rows.empty:
            failures.append(f"{scan_id}/{mode}: no results for expected score {score}")
            continue
        wrong = sorted(int(s) for s in rows["score"].unique() if int(s) != score)
        if wrong:
            failures.append(f"{scan_id}/{mode}: got {wrong}, expected {score}")
    return failures


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if not args.results.exists():
        print(f"[gate] Missing results: {args.results}")
        return 1
    try:
        expected = _parse_expected(args.expected)
    except ValueError as exc:
        print(f"[gate] {exc}")
        return 1
    df = pd.read_csv(args.results)
    scans = args.scans or sorted(df["scan_id"].unique())
    failures = _engine_failures(
        df,
        candidate=args.candidate,
        reference=args.reference,
        scans=scans,
        require_reference=args.require_reference,
    )
    failures.extend(_expected_failures(df, expected))
    if failures:
        print("[gate] Regression check failed:")
        for msg in failures:
            print(f" - {msg}")
        return 1
    print(
        f"[gate] Score check passed for {args.candidate} vs {args.reference} "
        f"on scans {', '.join(scans)}."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
