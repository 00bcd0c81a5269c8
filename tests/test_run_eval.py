import json

import pandas as pd

from valve_release.benchmarks.canonical import EXAMPLE_SCAN
from valve_release.eval import run_eval


def test_defaults_to_published_example(tmp_path):
    out_dir = tmp_path / "eval"
    exit_code = run_eval.main(["--out", str(out_dir), "--engines", "memoized", "exhaustive"])

    assert exit_code == 0
    df = pd.read_csv(out_dir / "results.csv")
    assert len(df) == 4
    assert set(df["scan_id"]) == {"example"}
    scores = df.groupby("mode")["score"].unique()
    assert list(scores["single"]) == [1651]
    assert list(scores["dual"]) == [1707]

    summary = pd.read_csv(out_dir / "summary.csv")
    assert {"scan_id", "mode", "engine", "score_mean", "runtime_s_std"} <= set(summary.columns)
    assert len(summary) == 4

    metadata = json.loads((out_dir / "metadata.json").read_text())
    assert metadata["scans"] == ["example"]
    assert metadata["engines"] == ["memoized", "exhaustive"]


def test_inputs_and_synthetic_sources(tmp_path):
    scan = tmp_path / "mine.txt"
    scan.write_text(EXAMPLE_SCAN)
    out_dir = tmp_path / "eval"
    exit_code = run_eval.main(
        [
            "--out",
            str(out_dir),
            "--inputs",
            str(scan),
            "--synthetic-tier",
            "small",
            "--synthetic-count",
            "2",
            "--modes",
            "single",
            "--repeats",
            "2",
            "--results-name",
            "results_custom.csv",
        ]
    )

    assert exit_code == 0
    df = pd.read_csv(out_dir / "results_custom.csv")
    assert set(df["suite"]) == {"inputs", "synthetic_small"}
    assert len(df) == 3 * 2
    assert (df["score"] >= 0).all()
    assert df.loc[df["scan_id"] == "mine", "score"].unique().tolist() == [1651]
    assert (out_dir / "summary_custom.csv").exists()


def test_missing_input_root_fails_cleanly(tmp_path):
    exit_code = run_eval.main(
        ["--out", str(tmp_path / "eval"), "--input-root", str(tmp_path / "absent")]
    )
    assert exit_code == 1
