"""Tests for zd.core.config module."""

from __future__ import annotations

from pathlib import Path

from zd.core.config import (
    DEFAULT_COMMIT_MESSAGE,
    Config,
    GitConfig,
    ReleaseConfig,
    load_config,
    load_config_or_default,
)
from zd.core.result import Err, Ok


class TestDefaults:
    def test_git_identity_is_anonymous_action(self) -> None:
        git = GitConfig()
        assert git.committer_name == "zenodraft/action"
        assert git.committer_email == ""
        assert git.remote == "origin"
        assert git.commit_message == DEFAULT_COMMIT_MESSAGE

    def test_release_defaults(self) -> None:
        release = ReleaseConfig()
        assert release.settle_seconds == 10.0
        assert "workflow_dispatch" in release.body


class TestFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert Config.from_dict({}) == Config()

    def test_overrides(self) -> None:
        config = Config.from_dict(
            {
                "git": {"committer_name": "bot", "committer_email": "bot@example.org"},
                "release": {"settle_seconds": 3},
                "http": {"timeout_seconds": 5.5},
            }
        )
        assert config.git.committer_name == "bot"
        assert config.git.committer_email == "bot@example.org"
        assert config.release.settle_seconds == 3.0
        assert config.http.timeout_seconds == 5.5

    def test_zero_settle_is_kept(self) -> None:
        assert Config.from_dict({"release": {"settle_seconds": 0}}).release.settle_seconds == 0.0


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "zenodraft.toml"
        path.write_text('[git]\nremote = "upstream"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.git.remote == "upstream"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "nope.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "zenodraft.toml"
        path.write_text("[git\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_negative_settle_is_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "zenodraft.toml"
        path.write_text("[release]\nsettle_seconds = -1\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "settle_seconds" in result.error.message


class TestLoadConfigOrDefault:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "zenodraft.toml") == Ok(Config())

    def test_broken_file_is_still_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "zenodraft.toml"
        path.write_text("not toml at all [", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)

    def test_directory_is_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "zenodraft.toml"
        path.mkdir()

        result = load_config_or_default(path)

        assert isinstance(result, Err)
        assert "Error reading config" in result.error.message
        assert result.error.path == path
