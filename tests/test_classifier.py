"""Tests for name based classification."""

from __future__ import annotations

import pytest

from devclean.core.classifier import Category, RECLAIMABLE_FOLDERS, classify


class TestClassifyDirectories:
    def test_node_modules(self):
        assert classify("node_modules", True) is Category.NODE_MODULES

    @pytest.mark.parametrize("name", sorted(RECLAIMABLE_FOLDERS - {"node_modules"}))
    def test_build_folders(self, name):
        assert classify(name, True) is Category.BUILD_FOLDER

    def test_match_is_case_sensitive(self):
        assert classify("Build", True) is Category.OTHER
        assert classify("NODE_MODULES", True) is Category.OTHER

    def test_match_is_exact(self):
        assert classify("build-tools", True) is Category.OTHER
        assert classify("my_node_modules", True) is Category.OTHER

    def test_file_named_like_folder_is_not_a_folder(self):
        assert classify("build", False) is Category.OTHER


class TestClassifyFiles:
    def test_log_files(self):
        assert classify("app.log", False) is Category.LOG_FILE
        assert classify("server.logs", False) is Category.LOG_FILE

    def test_temp_files(self):
        assert classify("x.tmp", False) is Category.TEMP_FILE
        assert classify("x.temp", False) is Category.TEMP_FILE
        assert classify("webpack.cache", False) is Category.TEMP_FILE

    def test_unmatched_files(self):
        assert classify("main.py", False) is Category.OTHER
        assert classify("app.log.gz", False) is Category.OTHER

    def test_extension_is_case_sensitive(self):
        assert classify("APP.LOG", False) is Category.OTHER

    def test_dotfile_has_no_extension(self):
        assert classify(".log", False) is Category.OTHER

    def test_directory_with_log_extension(self):
        assert classify("old.log", True) is Category.OTHER
