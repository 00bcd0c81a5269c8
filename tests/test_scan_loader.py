import pytest

from valve_release.benchmarks.canonical import EXAMPLE_SCAN
from valve_release.benchmarks.scan_loader import (
    INPUT_ROOT_ENV,
    discover_scan_files,
    load_scans,
)

_PAIR = (
    "Valve AA has flow rate=0; tunnel leads to valve BB\n"
    "Valve BB has flow rate=4; tunnel leads to valve AA\n"
)


def _write_scans(root):
    (root / "nested").mkdir(parents=True)
    (root / "example.txt").write_text(EXAMPLE_SCAN)
    (root / "nested" / "pair.in").write_text(_PAIR)
    (root / "notes.md").write_text("not a scan")


def test_discover_only_scan_suffixes(tmp_path):
    _write_scans(tmp_path)
    names = [p.name for p in discover_scan_files(tmp_path)]
    assert names == ["example.txt", "pair.in"]


def test_load_scans_ids_are_relative_paths(tmp_path):
    _write_scans(tmp_path)
    scans = load_scans(tmp_path)
    assert [s.scan_id for s in scans] == ["example", "nested/pair"]
    assert len(scans[1].network) == 2


def test_invalid_scan_is_skipped_with_warning(tmp_path):
    _write_scans(tmp_path)
    (tmp_path / "broken.txt").write_text("Valve AA is stuck\n")
    with pytest.warns(UserWarning, match="skipping invalid scan"):
        scans = load_scans(tmp_path)
    assert "broken" not in {s.scan_id for s in scans}


def test_limit_and_selection_seed_are_deterministic(tmp_path):
    _write_scans(tmp_path)
    first = load_scans(tmp_path, limit=1, selection_seed=4)
    second = load_scans(tmp_path, limit=1, selection_seed=4)
    assert len(first) == 1
    assert first[0].scan_id == second[0].scan_id


def test_env_root_fallback(tmp_path, monkeypatch):
    _write_scans(tmp_path)
    monkeypatch.setenv(INPUT_ROOT_ENV, str(tmp_path))
    assert len(load_scans(None)) == 2


def test_missing_root_raises(tmp_path, monkeypatch):
    monkeypatch.delenv(INPUT_ROOT_ENV, raising=False)
    with pytest.raises(FileNotFoundError):
        load_scans(None)
    with pytest.raises(FileNotFoundError):
        discover_scan_files(tmp_path / "absent")
    with pytest.raises(FileNotFoundError):
        discover_scan_files(tmp_path)
