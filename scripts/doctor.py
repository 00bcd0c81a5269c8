"""Environment inspector to help debug cross-OS issues."""

from __future__ import annotations

import platform
import subprocess
import sys
from importlib.util import find_spec


def _try_import(name: str):
    try:
        module = __import__(name)
    except Exception as exc:  # pragma: no cover - diagnostic only
        return None, exc
    return module, None


def _check_module(name: str):
    module, err = _try_import(name)
    if err:
        return "missing", str(err)
    return "ok", f"version={getattr(module, '__version__', 'unknown')}"


def _check_package():
    _, err = _try_import("valve_release")
    if err:
        return "missing", str(err)
    from valve_release.benchmarks.canonical import EXAMPLE_SCORES, example_network
    from valve_release.solver import solve

    single, dual = solve(example_network())
    expected = (EXAMPLE_SCORES["single"], EXAMPLE_SCORES["dual"])
    status = "ok" if (single, dual) == expected else "error"
    return status, f"example scores single={single}, dual={dual} (expected {expected})"


def _check_ruff():
    if find_spec("ruff"):
        completed = subprocess.run(
            [sys.executable, "-m", "ruff", "--version"], capture_output=True, text=True
        )
        if completed.returncode == 0:
            return "ok", completed.stdout.strip()
        return "error", completed.stderr.strip()
    return "missing", "ruff not importable"


def main() -> int:
    print("[doctor] platform:", platform.platform())
    print("[doctor] python:", sys.executable)
    print("[doctor] version:", sys.version.split()[0])
    print("[doctor] venv:", sys.prefix)

    for name in ("networkx", "pandas", "matplotlib", "pytest"):
        status, detail = _check_module(name)
        print(f"[doctor] {name}: {status} ({detail})")

    status, detail = _check_package()
    print(f"[doctor] valve_release: {status} ({detail})")

    status, detail = _check_ruff()
    print(f"[doctor] ruff: {status} ({detail})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
