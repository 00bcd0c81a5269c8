from valve_release.eval import plots, run_eval


def test_plots_written_from_eval_results(tmp_path):
    eval_dir = tmp_path / "eval"
    assert run_eval.main(["--out", str(eval_dir)]) == 0

    out_dir = tmp_path / "plots"
    assert plots.main(["--in", str(eval_dir / "results.csv"), "--out", str(out_dir)]) == 0
    for name in ("score_comparison", "runtime_comparison", "search_effort"):
        assert (out_dir / f"{name}.png").exists()
