from __future__ import annotations

import os
from pathlib import Path

import pytest

from bundlesize.models.snapshot import DevStats
from bundlesize.services.dev_stats import collect_dev_stats, dev_stats_report, folder_size
from tests.factories import write_file


class TestFolderSize:
    def test_sums_nested_files(self, tmp_path: Path) -> None:
        write_file(tmp_path, "a/index.js", 100)
        write_file(tmp_path, "a/lib/util.js", 50)
        write_file(tmp_path, "b/package.json", 25)
        assert folder_size(tmp_path) == 175

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinks_not_followed(self, tmp_path: Path) -> None:
        outside = write_file(tmp_path, "outside/big.bin", 1000)
        root = tmp_path / "node_modules"
        write_file(root, "pkg/index.js", 10)
        (root / "link").symlink_to(outside.parent, target_is_directory=True)
        assert folder_size(root) == 10


class TestCollectDevStats:
    def test_counts_top_level_entries(self, tmp_path: Path) -> None:
        write_file(tmp_path, "react/index.js", 10)
        write_file(tmp_path, "lodash/index.js", 20)
        write_file(tmp_path, ".package-lock.json", 5)
        assert collect_dev_stats(tmp_path) == DevStats(size=35, count=3)

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert collect_dev_stats(tmp_path / "node_modules") == DevStats()


class TestDevStatsReport:
    def test_without_previous(self) -> None:
        out = dev_stats_report(DevStats(size=1_500_000, count=12), None)
        assert out == "## node_modules stats\n\n**Module count:** 12\n\n**Total Size:** 1.5 MB\n"

    def test_growth(self) -> None:
        out = dev_stats_report(DevStats(size=2_000_000, count=15), DevStats(size=1_000_000, count=10))
        assert "**Module count:** 15 (**+5** change) 🆘" in out
        assert "**Total Size:** 2 MB (**+1 MB** change) 🆘" in out

    def test_shrink(self) -> None:
        out = dev_stats_report(DevStats(size=900, count=9), DevStats(size=1000, count=10))
        assert "**Module count:** 9 (**-1** change) 👏" in out
        assert "**Total Size:** 900 B (**-100 B** change) 👏" in out

    def test_unchanged_has_no_change_text(self) -> None:
        out = dev_stats_report(DevStats(size=10, count=1), DevStats(size=10, count=1))
        assert "change" not in out
