"""Typed configuration loading and access.

The config file is optional TOML (``zenodraft.toml`` in the workspace root).
Every key has a default so a workflow can run without one:

    [git]
    committer_name = "zenodraft/action"
    committer_email = ""
    remote = "origin"
    commit_message = "..."

    [release]
    settle_seconds = 10.0
    body = "..."

    [http]
    timeout_seconds = 30.0
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GitConfig",
    "HttpConfig",
    "ReleaseConfig",
    "CONFIG_FILENAME",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "zenodraft.toml"

DEFAULT_COMMITTER_NAME = "zenodraft/action"
DEFAULT_COMMIT_MESSAGE = "zenodraft/action updated the file CITATION.cff with the prereserved doi"
DEFAULT_RELEASE_BODY = "zenodraft automated release triggered by workflow_dispatch event"

# GitHub needs a moment after a tag is deleted before a release may reuse the name.
DEFAULT_SETTLE_SECONDS = 10.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Identity and messages used for the CITATION.cff commit."""

    committer_name: str = DEFAULT_COMMITTER_NAME
    # Empty on purpose: the commit is attributed to the action, not a person.
    committer_email: str = ""
    remote: str = "origin"
    commit_message: str = DEFAULT_COMMIT_MESSAGE


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    body: str = DEFAULT_RELEASE_BODY


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    git: GitConfig = field(default_factory=GitConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    http: HttpConfig = field(default_factory=HttpConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        git: StrDict = get_table(data, "git") or {}
        release: StrDict = get_table(data, "release") or {}
        http: StrDict = get_table(data, "http") or {}

        # committer_email is allowed to be blank, so it bypasses get_str.
        email = git.get("committer_email")

        settle = get_float(release, "settle_seconds")
        if settle is not None and settle < 0:
            raise ValueError("release.settle_seconds must not be negative")

        return cls(
            git=GitConfig(
                committer_name=get_str(git, "committer_name") or DEFAULT_COMMITTER_NAME,
                committer_email=email.strip() if isinstance(email, str) else "",
                remote=get_str(git, "remote") or "origin",
                commit_message=get_str(git, "commit_message") or DEFAULT_COMMIT_MESSAGE,
            ),
            release=ReleaseConfig(
                settle_seconds=DEFAULT_SETTLE_SECONDS if settle is None else settle,
                body=get_str(release, "body") or DEFAULT_RELEASE_BODY,
            ),
            http=HttpConfig(
                timeout_seconds=get_float(http, "timeout_seconds") or DEFAULT_HTTP_TIMEOUT_SECONDS,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        config = Config.from_dict(result.value)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or return the defaults if the file doesn't exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
