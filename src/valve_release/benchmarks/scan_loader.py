"""Lightweight loader for valve scans stored on disk."""

from __future__ import annotations

import hashlib
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from valve_release.network.model import START_VALVE, ValveNetwork
from valve_release.network.parser import load_network

INPUT_ROOT_ENV = "VALVE_INPUT_ROOT"
SCAN_SUFFIXES = (".txt", ".in")


@dataclass(frozen=True)
class ValveScan:
    """Container tying a parsed network to its source path."""

    scan_id: str
    path: Path
    network: ValveNetwork


def _resolve_root(root: str | Path | None) -> Path:
    """Prefer explicit root, fall back to env var."""
    if root is not None:
        return Path(root).expanduser().resolve()
    env_path = os.environ.get(INPUT_ROOT_ENV)
    if env_path:
        return Path(env_path).expanduser().resolve()
    msg = f"Input root not provided; set {INPUT_ROOT_ENV} or pass --input-root."
    raise FileNotFoundError(msg)


def discover_scan_files(root: str | Path | None) -> list[Path]:
    """Recursively find scan files beneath ``root``.

    Raises:
        FileNotFoundError: when ``root`` does not exist or no files are found.
    """
    root_path = _resolve_root(root)
    if not root_path.exists():
        msg = f"Input root not found: {root_path}"
        raise FileNotFoundError(msg)

    scans = sorted(
        p for p in root_path.rglob("*") if p.is_file() and p.suffix in SCAN_SUFFIXES
    )
    if not scans:
        msg = f"No scan files ({', '.join(SCAN_SUFFIXES)}) found under {root_path}"
        raise FileNotFoundError(msg)
    return scans


def _scan_id_for_path(path: Path, root: Path) -> str:
    relative = path.relative_to(root)
    return relative.with_suffix("").as_posix()


def _stable_order(items: Iterable[ValveScan], seed: int) -> list[ValveScan]:
    keyed = []
    for scan in items:
        digest = hashlib.sha1(f"{scan.path}:{seed}".encode()).hexdigest()
        keyed.append((digest, scan))
    keyed.sort(key=lambda x: x[0])
    return [s for _, s in keyed]


def load_scan(path: str | Path, *, root: Path | None = None, start: str = START_VALVE) -> ValveScan:
    file_path = Path(path).expanduser().resolve()
    scan_id = _scan_id_for_path(file_path, root) if root is not None else file_path.stem
    return ValveScan(scan_id, file_path, load_network(file_path, start=start))


def load_scans(
    root: str | Path | None,
    *,
    limit: int | None = None,
    selection_seed: int | None = None,
    start: str = START_VALVE,
) -> list[ValveScan]:
    """Parse every scan under ``root``; malformed files are skipped with a warning.

    Args:
        root: Directory holding scans (or ``VALVE_INPUT_ROOT``).
        limit: Keep at most this many scans after ordering.
        selection_seed: When given, order scans by a path+seed hash instead of
            by path, so ``limit`` picks a deterministic pseudo-random subset.
        start: Start valve identity expected in every scan.
    """
    root_path = _resolve_root(root)
    scans: list[ValveScan] = []
    for path in discover_scan_files(root_path):
        try:
            scans.append(load_scan(path, root=root_path, start=start))
        except ValueError as exc:
            warnings.warn(f"[scans] skipping invalid scan {path}: {exc}")
            continue

    if selection_seed is not None:
        scans = _stable_order(scans, selection_seed)
    if limit is not None:
        scans = scans[:limit]
    return scans


__all__ = [
    "INPUT_ROOT_ENV",
    "ValveScan",
    "discover_scan_files",
    "load_scan",
    "load_scans",
]
