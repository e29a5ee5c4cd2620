from __future__ import annotations

from pathlib import Path

from bundlesize.config.defaults import default_config
from bundlesize.models.enums import Compression
from bundlesize.models.snapshot import Baseline
from bundlesize.services.diff import diff_snapshots
from bundlesize.services.measure import read_current_sizes
from bundlesize.services.report import build_report
from bundlesize.storage.gist import decode_baseline, encode_baseline
from tests.factories import write_file


class TestFullPipeline:
    def test_measure_store_then_compare(self, tmp_path: Path) -> None:
        config = default_config()
        config.measure.compression = Compression.NONE

        write_file(tmp_path, "build/output/main.a1b2c3d4.js", 1000)
        write_file(tmp_path, "build/output/vendor.js", 500)
        write_file(tmp_path, "build/output/precache-manifest.0011.js", 42)
        stored = encode_baseline(Baseline(bundle=read_current_sizes(tmp_path, config.measure)))

        # Next build: new content hash, one file grows, one is added, one is removed.
        (tmp_path / "build/output/main.a1b2c3d4.js").unlink()
        (tmp_path / "build/output/vendor.js").unlink()
        write_file(tmp_path, "build/output/main.ffee0099.js", 1100)
        write_file(tmp_path, "build/output/styles.css", 300)

        previous = decode_baseline(stored)
        current = read_current_sizes(tmp_path, config.measure)
        out = build_report(diff_snapshots(previous.bundle, current), config.report_config())

        assert "| `/main.********.js` | 1.1 kB | +100 B (+10%) | ⚠️ |" in out
        assert "| `/vendor.js` | 0 B | -500 B (removed) | 🏆 |" in out
        assert "| `/styles.css` | 300 B | +300 B (new file) | 🆕 |" in out
        assert "precache-manifest" not in out
        assert out.startswith("**Size Change:** -100 B (-7%) ✅\n\n**Total Size:** 1.4 kB\n\n")


class TestLegacyBaseline:
    def test_bare_snapshot_compares_like_wrapped(self) -> None:
        cfg = default_config().report_config()
        current = {"/a.js": 1100}
        legacy = decode_baseline({"/a.js": 1000})
        wrapped = decode_baseline({"bundle": {"/a.js": 1000}})
        assert build_report(diff_snapshots(legacy.bundle, current), cfg) == build_report(
            diff_snapshots(wrapped.bundle, current), cfg
        )
