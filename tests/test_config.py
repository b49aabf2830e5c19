"""Tests for configuration management."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from prguard.config import (
    PolicyConfig,
    as_int,
    csv_list,
    find_config_file,
    load_repo_config,
    read_config_file,
    resolve_config,
)
from prguard.exceptions import ConfigReadError


class TestPolicyConfig:
    def test_defaults(self):
        config = PolicyConfig()
        assert config.max_lines == 400
        assert config.max_files == 25
        assert config.test_dir_names == ["test", "tests", "__tests__"]
        assert config.exclude_globs == []
        assert config.mode == "warn"
        assert config.retry_count == 2

    def test_mode_lowercased(self):
        assert PolicyConfig(mode=" FAIL ").mode == "fail"
        assert PolicyConfig(mode="FAIL").fails_on_violation

    def test_retries_clamped(self):
        assert PolicyConfig(retry_count=-3).retry_count == 0

    def test_frozen(self):
        config = PolicyConfig()
        with pytest.raises(ValidationError):
            config.max_lines = 10


class TestHelpers:
    def test_csv_list(self):
        assert csv_list(" a, b ,,c ") == ["a", "b", "c"]
        assert csv_list(["x", " y "]) == ["x", "y"]
        assert csv_list(None) == []
        assert csv_list("") == []

    def test_as_int(self):
        assert as_int("12") == 12
        assert as_int(" 7 ") == 7
        assert as_int("12abc") is None
        assert as_int("") is None
        assert as_int(True) is None
        assert as_int(None) is None


class TestConfigFile:
    def test_yml_wins_over_yaml(self, tmp_path: Path):
        (tmp_path / ".pr_guard.yaml").write_text("max_lines: 1\n")
        (tmp_path / ".pr_guard.yml").write_text("max_lines: 2\n")
        assert find_config_file(tmp_path).name == ".pr_guard.yml"
        assert load_repo_config(tmp_path)["max_lines"] == 2

    def test_yaml_extension(self, tmp_path: Path):
        (tmp_path / ".pr_guard.yaml").write_text("max_files: 9\n")
        assert load_repo_config(tmp_path) == {"max_files": 9}

    def test_missing_file(self, tmp_path: Path):
        assert load_repo_config(tmp_path) == {}

    def test_all_fields(self, tmp_path: Path):
        (tmp_path / ".pr_guard.yml").write_text(
            "max_lines: 800\n"
            "max_files: 40\n"
            "mode: FAIL\n"
            "retries: 5\n"
            "test_paths: [spec, e2e]\n"
            "exclude: '**/*.snap, docs/**'\n"
            "owner: ignored\n"
        )
        cfg = load_repo_config(tmp_path)
        assert cfg == {
            "max_lines": 800,
            "max_files": 40,
            "mode": "fail",
            "retries": 5,
            "test_paths": ["spec", "e2e"],
            "exclude": ["**/*.snap", "docs/**"],
        }

    def test_empty_document(self, tmp_path: Path):
        (tmp_path / ".pr_guard.yml").write_text("")
        assert load_repo_config(tmp_path) == {}

    def test_malformed_yaml_warns(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        (tmp_path / ".pr_guard.yml").write_text("max_lines: [unclosed\n")
        with caplog.at_level(logging.WARNING, logger="prguard"):
            assert load_repo_config(tmp_path) == {}
        assert "Failed to parse .pr_guard.yml" in caplog.text

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / ".pr_guard.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigReadError):
            read_config_file(path)
        assert load_repo_config(tmp_path) == {}

    def test_unparseable_number_is_dropped(self, tmp_path: Path):
        (tmp_path / ".pr_guard.yml").write_text("max_lines: lots\nmax_files: 3\n")
        config = resolve_config({}, load_repo_config(tmp_path))
        assert config.max_lines == 400
        assert config.max_files == 3


class TestResolveConfig:
    def test_defaults_only(self):
        assert resolve_config() == PolicyConfig()

    def test_override_beats_file(self):
        config = resolve_config({"max_lines": "50"}, {"max_lines": 800})
        assert config.max_lines == 50

    def test_file_beats_default(self):
        config = resolve_config({}, {"max_files": 3, "mode": "fail"})
        assert config.max_files == 3
        assert config.mode == "fail"

    def test_bad_override_falls_to_file(self):
        config = resolve_config({"max_lines": "abc"}, {"max_lines": 800})
        assert config.max_lines == 800

    def test_bad_override_falls_to_default(self):
        config = resolve_config({"max_files": "", "retries": "x"}, {})
        assert config.max_files == 25
        assert config.retry_count == 2

    def test_non_positive_limit_falls_back(self):
        config = resolve_config({"max_lines": "0", "max_files": "-4"}, {})
        assert config.max_lines == 400
        assert config.max_files == 25

    def test_negative_retries_clamped(self):
        assert resolve_config({"retries": "-1"}).retry_count == 0

    def test_zero_retries_kept(self):
        assert resolve_config({"retries": "0"}, {"retries": 4}).retry_count == 0

    def test_list_overrides(self):
        config = resolve_config(
            {"test_paths": "spec, e2e", "exclude": ["*.lock"]},
            {"test_paths": ["tests"], "exclude": ["docs/**"]},
        )
        assert config.test_dir_names == ["spec", "e2e"]
        assert config.exclude_globs == ["*.lock"]

    def test_empty_list_override_falls_back(self):
        config = resolve_config({"test_paths": " , "}, {"test_paths": ["spec"]})
        assert config.test_dir_names == ["spec"]

    def test_mode_case_normalized(self):
        assert resolve_config({"mode": "Fail"}).mode == "fail"

    def test_unknown_mode_kept_with_warning(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="prguard"):
            config = resolve_config({"mode": "Strict"})
        assert config.mode == "strict"
        assert not config.fails_on_violation
        assert "Unknown mode 'strict'" in caplog.text
