"""Cross-platform task runner for valve-release.

All commands use the currently active Python interpreter (sys.executable) so they work
on POSIX and Windows without Make.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ARTIFACTS_ENV = "ARTIFACTS"
DEFAULT_ARTIFACTS = "artifacts"


class RunError(Exception):
    """Raised when an invoked command fails."""


def _log(msg: str) -> None:
    print(f"[run] {msg}")


def _run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    _log("$ " + " ".join(cmd))
    result = subprocess.run(cmd, env=env)
    if result.returncode != 0:
        raise RunError(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")


def _artifacts_root() -> Path:
    return Path(os.environ.get(ARTIFACTS_ENV, DEFAULT_ARTIFACTS))


def _default_results() -> Path:
    return _artifacts_root() / "eval" / "results.csv"


def cmd_lint(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "check", "."])
    _run([sys.executable, "-m", "ruff", "format", "--check", "."])


def cmd_format(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "format", "."])
    _run([sys.executable, "-m", "ruff", "check", "--fix", "."])


def cmd_test(args: argparse.Namespace) -> None:
    pytest_cmd = [sys.executable, "-m", "pytest"]
    if args.quiet:
        pytest_cmd.append("-q")
    _run(pytest_cmd)


def cmd_eval(args: argparse.Namespace) -> None:
    out_dir = args.out or (_artifacts_root() / "eval")
    cmd = [
        sys.executable,
        "-m",
        "valve_release.eval.run_eval",
        "--out",
        str(out_dir),
        "--engines",
        *args.engines,
        "--repeats",
        str(args.repeats),
        "--include-example",
    ]
    if args.inputs:
        cmd += ["--inputs", *[str(p) for p in args.inputs]]
    if args.input_root:
        cmd += ["--input-root", str(args.input_root)]
    if args.synthetic_tier:
        cmd += [
            "--synthetic-tier",
            args.synthetic_tier,
            "--synthetic-count",
            str(args.synthetic_count),
        ]
    _run(cmd)


def cmd_invariants(args: argparse.Namespace) -> None:
    results = args.results or _default_results()
    if not results.exists():
        raise RunError(f"Could not locate results CSV at {results}; run eval or pass --results")
    out_dir = args.out or (results.parent / "invariants")
    _run(
        [
            sys.executable,
            "-m",
            "valve_release.eval.invariants",
            "--results",
            str(results),
            "--out",
            str(out_dir),
        ]
    )


def cmd_gate(args: argparse.Namespace) -> None:
    results = args.results or _default_results()
    if not results.exists():
        raise RunError(f"Could not locate results CSV at {results}; run eval or pass --results")
    _run(
        [
            sys.executable,
            "-m",
            "valve_release.eval.regression_checks",
            "--results",
            str(results),
            "--require-reference",
            "--expected",
            "example:single=1651",
            "example:dual=1707",
        ]
    )


def cmd_plots(args: argparse.Namespace) -> None:
    results = args.results or _default_results()
    if not results.exists():
        raise RunError(f"Could not locate results CSV at {results}; run eval or pass --results")
    out_dir = args.out or (results.parent / "plots")
    _run(
        [
            sys.executable,
            "-m",
            "valve_release.eval.plots",
            "--in",
            str(results),
            "--out",
            str(out_dir),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    lint_p = sub.add_parser("lint", help="Run ruff checks")
    lint_p.set_defaults(func=cmd_lint)

    fmt_p = sub.add_parser("format", help="Apply ruff format and fixes")
    fmt_p.set_defaults(func=cmd_format)

    test_p = sub.add_parser("test", help="Run pytest")
    test_p.add_argument("--quiet", action="store_true", help="Quiet pytest output")
    test_p.set_defaults(func=cmd_test)

    ev = sub.add_parser("eval", help="Solve scans with both engines and write results")
    ev.add_argument("--inputs", type=Path, nargs="*", help="Scan files")
    ev.add_argument("--input-root", type=Path, help="Directory of scans")
    ev.add_argument("--synthetic-tier", choices=["small", "medium", "large"])
    ev.add_argument("--synthetic-count", type=int, default=4)
    ev.add_argument(
        "--engines", nargs="+", default=["memoized", "exhaustive"], help="Search variants"
    )
    ev.add_argument("--repeats", type=int, default=1)
    ev.add_argument("--out", type=Path, help="Output directory (defaults to $ARTIFACTS/eval)")
    ev.set_defaults(func=cmd_eval)

    inv = sub.add_parser("invariants", help="Run invariant checks on results CSV")
    inv.add_argument("--results", type=Path, help="Path to results CSV")
    inv.add_argument("--out", type=Path, help="Output directory for report")
    inv.set_defaults(func=cmd_invariants)

    gate = sub.add_parser("gate", help="Compare memoized scores against the exhaustive search")
    gate.add_argument("--results", type=Path, help="Path to results CSV")
    gate.set_defaults(func=cmd_gate)

    plots = sub.add_parser("plots", help="Render score/runtime plots")
    plots.add_argument("--results", type=Path, help="Path to results CSV")
    plots.add_argument("--out", type=Path, help="Output directory for figures")
    plots.set_defaults(func=cmd_plots)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except RunError as exc:  # pragma: no cover - simple CLI error
        _log(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
