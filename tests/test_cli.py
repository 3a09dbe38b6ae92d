"""Tests for the command line interface."""

from __future__ import annotations

import json
import os
import time

import pytest
from click.testing import CliRunner

from devclean.cli import main

from conftest import make_file

pytestmark = pytest.mark.usefixtures("isolate_storage", "isolate_settings")

PAYLOAD = b"0123456789abcdef" * 128  # 2048 bytes


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workspace(tmp_path):
    root = tmp_path / "workspace"
    fresh = root / "fresh_app"
    make_file(fresh / "node_modules" / "lib.js", 400)
    make_file(fresh / "dist" / "bundle.js", 300)
    make_file(fresh / "server.log", 200)
    old = root / "old_app"
    make_file(old / "node_modules" / "lib.js", 100)
    old_mtime = time.time() - 400 * 86400
    os.utime(old, (old_mtime, old_mtime))
    return root


class TestScanCommand:
    def test_json(self, runner, workspace, isolate_storage):
        result = runner.invoke(main, ["scan", "--root", str(workspace), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["total_bytes"] == 1000
        assert len(data["node_modules"]) == 2
        stale = {os.path.basename(os.path.dirname(i["path"])): i["is_stale"] for i in data["node_modules"]}
        assert stale == {"fresh_app": False, "old_app": True}
        assert data["build_folders"][0]["subtype"] == "dist"
        assert json.loads(isolate_storage.read_text())["total_scans"] == 1

    def test_text(self, runner, workspace):
        result = runner.invoke(main, ["scan", "--root", str(workspace)])

        assert result.exit_code == 0, result.output
        assert "Total reclaimable" in result.output
        assert "[stale]" in result.output


class TestCleanCommand:
    def test_dry_run_deletes_nothing(self, runner, workspace):
        result = runner.invoke(main, ["clean", "--root", str(workspace), "--dry-run", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["status"] == "dry_run"
        assert data["would_free_bytes"] == 300 + 200 + 100
        assert (workspace / "fresh_app" / "dist").exists()

    def test_clean(self, runner, workspace, isolate_storage):
        result = runner.invoke(main, ["clean", "--root", str(workspace), "--yes", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["deleted"] == 3
        assert data["failed"] == 0
        assert data["freed_bytes"] == 600
        assert not (workspace / "old_app" / "node_modules").exists()
        assert not (workspace / "fresh_app" / "dist").exists()
        assert (workspace / "fresh_app" / "node_modules").exists()

        stats = json.loads(isolate_storage.read_text())
        assert stats["total_cleans"] == 1
        assert stats["total_space_freed"] == 600

    def test_abort_on_no(self, runner, workspace):
        result = runner.invoke(main, ["clean", "--root", str(workspace)], input="n\n")

        assert result.exit_code == 0
        assert "Aborted." in result.output
        assert (workspace / "fresh_app" / "dist").exists()

    def test_nothing_to_clean(self, runner, tmp_path):
        result = runner.invoke(main, ["clean", "--root", str(tmp_path), "--yes"])
        assert result.exit_code == 0
        assert "Nothing to clean." in result.output


class TestDuplicatesCommand:
    @pytest.fixture
    def dups(self, tmp_path):
        path = tmp_path / "dups"
        path.mkdir()
        return path

    def test_report(self, runner, dups):
        make_file(dups / "a.txt", content=PAYLOAD)
        make_file(dups / "copy_of_a.txt", content=PAYLOAD)

        result = runner.invoke(main, ["duplicates", "--path", str(dups), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["keep"] == "first"
        assert data["wasted_bytes"] == len(PAYLOAD)
        assert len(data["sets"]) == 1
        assert len(data["sets"][0]["files"]) == 2

    def test_delete(self, runner, dups):
        make_file(dups / "a.txt", content=PAYLOAD)
        make_file(dups / "copy_of_a.txt", content=PAYLOAD)

        result = runner.invoke(main, ["duplicates", "--path", str(dups), "--delete", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Deleted 1 duplicate files" in result.output
        assert len(list(dups.iterdir())) == 1

    def test_keep_from_settings(self, runner, dups, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text(json.dumps({"duplicates": {"keep": "oldest"}}))
        make_file(dups / "a.txt", content=PAYLOAD)

        result = runner.invoke(main, ["duplicates", "--path", str(dups), "--json"])

        assert json.loads(result.stdout)["keep"] == "oldest"

    def test_missing_path(self, runner, tmp_path):
        result = runner.invoke(main, ["duplicates", "--path", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Directory not found" in result.output


class TestOrganizeCommand:
    def test_organize(self, runner, tmp_path):
        make_file(tmp_path / "a.png", 1)
        make_file(tmp_path / "b.zip", 1)

        result = runner.invoke(main, ["organize", str(tmp_path), "--yes", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["moved"] == 2
        assert data["bucket_count"] == 2
        assert (tmp_path / "Images" / "a.png").exists()
        assert (tmp_path / "Archives" / "b.zip").exists()

    def test_missing_target(self, runner, tmp_path):
        result = runner.invoke(main, ["organize", str(tmp_path / "Downloads"), "--yes"])

        assert result.exit_code == 1
        assert "Directory not found" in result.output
        assert not (tmp_path / "Downloads").exists()


class TestCacheCommand:
    def test_clears_installed(self, runner, monkeypatch):
        cleared = []
        monkeypatch.setattr("devclean.cli.available_managers", lambda: ["npm", "pnpm"])
        monkeypatch.setattr("devclean.cli.clear_cache", lambda name: cleared.append(name) or True)

        result = runner.invoke(main, ["cache", "--yes"])

        assert result.exit_code == 0, result.output
        assert cleared == ["npm", "pnpm"]

    def test_no_managers(self, runner, monkeypatch):
        monkeypatch.setattr("devclean.cli.available_managers", lambda: [])
        result = runner.invoke(main, ["cache", "--yes"])
        assert result.exit_code == 1

    def test_failure_exit_code(self, runner, monkeypatch):
        monkeypatch.setattr("devclean.cli.available_managers", lambda: ["yarn"])
        monkeypatch.setattr("devclean.cli.clear_cache", lambda name: False)
        result = runner.invoke(main, ["cache", "yarn", "--yes"])
        assert result.exit_code == 1


class TestStatsCommand:
    def test_json(self, runner, workspace):
        runner.invoke(main, ["scan", "--root", str(workspace), "--json"])
        result = runner.invoke(main, ["stats", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["total_scans"] == 1
        assert data["total_cleans"] == 0

    def test_text_defaults(self, runner):
        result = runner.invoke(main, ["stats"])
        assert result.exit_code == 0
        assert "never" in result.output

    def test_text_with_mistyped_file(self, runner, isolate_storage):
        isolate_storage.write_text(json.dumps({"total_space_freed": None, "total_scans": "x"}))

        result = runner.invoke(main, ["stats"])

        assert result.exit_code == 0, result.output
        assert "0 B" in result.output

    def test_scan_survives_mistyped_file(self, runner, workspace, isolate_storage):
        isolate_storage.write_text(json.dumps({"total_scans": "abc"}))

        result = runner.invoke(main, ["scan", "--root", str(workspace), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(isolate_storage.read_text())["total_scans"] == 1
