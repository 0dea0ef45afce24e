"""Tests for the lockfile analyzer and configuration."""

import json

import pytest

from lock_watch.config import (
    AFFECTED_LIST_ENV_VAR,
    DEFAULT_AFFECTED_PACKAGES,
    LockWatchConfig,
    load_config,
)
from lock_watch.core.analyzer import AnalysisReport, LockfileAnalyzer
from lock_watch.core.errors import (
    EmptyResultError,
    ErrorKind,
    ReadFailureError,
    UnsupportedFormatError,
)
from lock_watch.core.matcher import AffectedPackage


@pytest.fixture
def package_lock_file(tmp_path):
    """Create a temporary package-lock.json file."""
    lock_file = tmp_path / "package-lock.json"
    lock_file.write_text(json.dumps({
        "lockfileVersion": 3,
        "packages": {
            "": {"name": "app", "version": "1.0.0"},
            "node_modules/chalk": {"version": "5.6.1"},
            "node_modules/debug": {"version": "4.4.2"},
            "node_modules/ms": {"version": "2.1.3"},
        }
    }), encoding="utf-8")
    return lock_file


class TestLockfileAnalyzer:
    """Test running a full analysis."""

    def test_analyze_content(self):
        report = LockfileAnalyzer().analyze(
            "yarn.lock",
            'debug@^4.0.0:\n  version "4.4.2"\nms@^2.1.1:\n  version "2.1.3"\n',
            {"debug"}
        )

        assert isinstance(report, AnalysisReport)
        assert report.file_name == "yarn.lock"
        assert report.result.found == [AffectedPackage("debug", "4.4.2")]
        assert report.result.scanned_count == 2
        assert report.analysis_time >= 0

    def test_analyze_file(self, package_lock_file):
        report = LockfileAnalyzer().analyze_file(package_lock_file, {"debug", "chalk"})

        assert report.file_name == "package-lock.json"
        assert report.result.found == [
            AffectedPackage("chalk", "5.6.1"),
            AffectedPackage("debug", "4.4.2"),
        ]
        assert report.result.scanned_count == 3

    def test_same_input_same_result(self, package_lock_file):
        analyzer = LockfileAnalyzer()
        first = analyzer.analyze_file(package_lock_file, {"ms"})
        second = analyzer.analyze_file(package_lock_file, {"ms"})

        assert first.result == second.result
        assert first.diagnostics == second.diagnostics

    def test_unsupported_file_not_read(self, tmp_path):
        """Test that the name is checked before the file is opened."""
        missing = tmp_path / "yarn.lockfile"
        with pytest.raises(UnsupportedFormatError):
            LockfileAnalyzer().analyze_file(missing, {"lodash"})

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReadFailureError) as exc_info:
            LockfileAnalyzer().analyze_file(tmp_path / "yarn.lock", {"lodash"})

        assert exc_info.value.kind == ErrorKind.READ_FAILURE
        assert exc_info.value.message == "Error reading the file."

    def test_directory_instead_of_file(self, tmp_path):
        lock_dir = tmp_path / "package-lock.json"
        lock_dir.mkdir()
        with pytest.raises(ReadFailureError):
            LockfileAnalyzer().analyze_file(lock_dir, {"lodash"})

    def test_undecodable_file(self, tmp_path):
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_bytes(b"\xff\xfe\xfa invalid")
        with pytest.raises(ReadFailureError):
            LockfileAnalyzer().analyze_file(lock_file, {"lodash"})

    def test_yarn_lock_with_byte_order_mark(self, tmp_path):
        """Test that a leading BOM does not end up in the first package name."""
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_bytes(b'\xef\xbb\xbflodash@^4.17.0:\n  version "4.17.21"\n')

        report = LockfileAnalyzer().analyze_file(lock_file, {"lodash"})

        assert report.result.found == [AffectedPackage("lodash", "4.17.21")]

    def test_package_lock_with_byte_order_mark(self, tmp_path):
        lock_file = tmp_path / "package-lock.json"
        lock_file.write_bytes(
            b"\xef\xbb\xbf" + json.dumps({
                "packages": {"node_modules/debug": {"version": "4.4.2"}}
            }).encode("utf-8")
        )

        report = LockfileAnalyzer().analyze_file(lock_file, {"debug"})

        assert report.result.found == [AffectedPackage("debug", "4.4.2")]
        assert report.result.scanned_count == 1

    def test_parse_errors_propagate(self, tmp_path):
        lock_file = tmp_path / "yarn.lock"
        lock_file.write_text("# empty\n", encoding="utf-8")
        with pytest.raises(EmptyResultError):
            LockfileAnalyzer().analyze_file(lock_file, {"lodash"})

    def test_diagnostics_carried(self):
        content = json.dumps({
            "packages": {"node_modules/lodash": {"version": "4.17.21"}},
            "dependencies": {},
        })
        report = LockfileAnalyzer().analyze("package-lock.json", content, {"lodash"})
        assert len(report.diagnostics) == 1


class TestLockWatchConfig:
    """Test the affected list configuration."""

    def test_load_config_default(self):
        config = load_config({})
        assert config.affected_list_path.name == ".lockwatch_affected.txt"
        assert config.encoding == "utf-8-sig"

    def test_load_config_from_environment(self, tmp_path):
        list_file = tmp_path / "affected.txt"
        config = load_config({AFFECTED_LIST_ENV_VAR: str(list_file)})
        assert config.affected_list_path == list_file

    def test_builtin_list_when_missing(self, tmp_path):
        config = LockWatchConfig(affected_list_path=tmp_path / "missing.txt")
        names = config.load_affected_names()

        assert names == DEFAULT_AFFECTED_PACKAGES
        assert "chalk" in names

    def test_save_and_load(self, tmp_path):
        config = LockWatchConfig(affected_list_path=tmp_path / "nested" / "affected.txt")
        config.save_affected_names(["lodash", " debug ", ""])

        assert config.affected_list_path.read_text(encoding="utf-8") == "debug\nlodash\n"
        assert config.load_affected_names() == frozenset({"lodash", "debug"})

    def test_list_with_byte_order_mark(self, tmp_path):
        list_file = tmp_path / "affected.txt"
        list_file.write_bytes(b"\xef\xbb\xbfchalk\ndebug\n")
        config = LockWatchConfig(affected_list_path=list_file)

        assert config.load_affected_names() == frozenset({"chalk", "debug"})

    def test_saved_list_has_no_byte_order_mark(self, tmp_path):
        config = LockWatchConfig(affected_list_path=tmp_path / "affected.txt")
        config.save_affected_names(["chalk"])
        assert config.affected_list_path.read_bytes() == b"chalk\n"

    def test_reset(self, tmp_path):
        config = LockWatchConfig(affected_list_path=tmp_path / "affected.txt")
        config.save_affected_names(["lodash"])
        config.reset_affected_names()

        assert not config.affected_list_path.exists()
        assert config.load_affected_names() == DEFAULT_AFFECTED_PACKAGES
