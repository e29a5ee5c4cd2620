from __future__ import annotations

from bundlesize.config.schema import ReportConfig
from bundlesize.services.diff import diff_snapshots
from bundlesize.services.report import build_report
from tests.factories import make_diff


def _config(**overrides: object) -> ReportConfig:
    cfg = ReportConfig(show_total=True, collapse_unchanged=True, omit_unchanged=False, minimum_change_threshold=10)
    for key, value in overrides.items():
        setattr(cfg, key, value)
    return cfg


class TestScenarios:
    def test_changed_and_collapsed_unchanged(self) -> None:
        diffs = diff_snapshots({"a.js": 1000, "b.js": 500}, {"a.js": 1100, "b.js": 500})
        out = build_report(diffs, _config())
        assert out == (
            "**Size Change:** +100 B (+7%) 🔍\n\n"
            "**Total Size:** 1.6 kB\n\n"
            "| Filename | Size | Change |  |\n"
            "| :--- | :---: | :---: | :---: |\n"
            "| `a.js` | 1.1 kB | +100 B (+10%) | ⚠️ |"
            "\n\n<details><summary>ℹ️ <strong>View Unchanged</strong></summary>\n\n"
            "| Filename | Size |\n"
            "| :--- | :---: |\n"
            "| `b.js` | 500 B |"
            "\n\n</details>\n\n"
        )

    def test_new_file_from_empty_baseline(self) -> None:
        out = build_report(diff_snapshots({}, {"a.js": 100}), _config())
        lines = out.split("\n")
        assert lines[0] == "**Size Change:** +100 B (new file) 🆕"
        assert lines[2] == "**Total Size:** 100 B"
        assert "| `a.js` | 100 B | +100 B (new file) | 🆕 |" in lines

    def test_removed_file(self) -> None:
        out = build_report(diff_snapshots({"old.js": 200}, {}), _config(show_total=False))
        assert out.split("\n")[-1] == "| `old.js` | 0 B | -200 B (removed) | 🏆 |"


class TestFiltering:
    def test_omit_unchanged_drops_rows_but_counts_totals(self) -> None:
        diffs = [make_diff("a.js", 1000, 1100), make_diff("b.js", 500, 505)]
        out = build_report(diffs, _config(omit_unchanged=True))
        assert "b.js" not in out
        assert "View Unchanged" not in out
        assert "**Total Size:** 1.6 kB" in out
        assert "**Size Change:** +105 B (+7%)" in out

    def test_unchanged_inline_without_collapse(self) -> None:
        diffs = [make_diff("a.js", 1000, 1100), make_diff("b.js", 500, 500)]
        out = build_report(diffs, _config(collapse_unchanged=False, show_total=False))
        assert "View Unchanged" not in out
        assert "| `b.js` | 500 B | 0 B |  |" in out

    def test_threshold_zero_keeps_everything_changed(self) -> None:
        diffs = [make_diff("a.js", 500, 501)]
        out = build_report(diffs, _config(minimum_change_threshold=0, show_total=False))
        assert out.split("\n")[-1] == "| `a.js` | 501 B | +1 B (0%) |"

    def test_delta_at_threshold_counts_as_changed(self) -> None:
        diffs = [make_diff("a.js", 500, 510)]
        out = build_report(diffs, _config(show_total=False))
        assert "View Unchanged" not in out
        assert "`a.js`" in out

    def test_all_unchanged_leaves_main_table_empty(self) -> None:
        diffs = [make_diff("a.js", 500, 500)]
        out = build_report(diffs, _config(show_total=False))
        assert out.startswith("\n\n<details>")

    def test_no_totals(self) -> None:
        out = build_report([make_diff("a.js", 0, 100)], _config(show_total=False))
        assert "Total Size" not in out
        assert out.startswith("| Filename |")


class TestDeterminism:
    def test_identical_inputs_identical_output(self) -> None:
        diffs = diff_snapshots({"a.js": 1000, "b.js": 500, "c.js": 30}, {"a.js": 900, "b.js": 503, "d.js": 1})
        cfg = _config()
        assert build_report(diffs, cfg) == build_report(diffs, cfg)

    def test_accepts_generator(self) -> None:
        diffs = diff_snapshots({"a.js": 1000}, {"a.js": 2000})
        out = build_report((d for d in diffs), _config())
        assert "| `a.js` | 2 kB | +1 kB (+100%) | 🆘 |" in out

    def test_filenames_are_not_escaped(self) -> None:
        out = build_report([make_diff("<b>x|y</b>.js", 0, 10)], _config(show_total=False))
        assert "`<b>x|y</b>.js`" in out
