"""GitHub Actions runtime environment.

The runner exposes the trigger through environment variables. Reading them
happens once, here; everything downstream receives plain values.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .config import ConfigError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict

__all__ = [
    "ActionEnvironment",
    "DEFAULT_API_URL",
    "load_event_payload",
    "require_token",
    "write_outputs",
]

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class ActionEnvironment:
    event_name: str | None
    event_path: Path | None
    workspace: Path | None
    api_url: str
    output_path: Path | None
    token: str | None
    in_actions: bool

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ActionEnvironment:
        def path_or_none(key: str) -> Path | None:
            value = env.get(key, "").strip()
            return Path(value) if value else None

        return cls(
            event_name=env.get("GITHUB_EVENT_NAME") or None,
            event_path=path_or_none("GITHUB_EVENT_PATH"),
            workspace=path_or_none("GITHUB_WORKSPACE"),
            api_url=(env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            output_path=path_or_none("GITHUB_OUTPUT"),
            token=env.get("GITHUB_TOKEN") or None,
            in_actions=env.get("GITHUB_ACTIONS") == "true",
        )


def require_token(environment: ActionEnvironment) -> Result[str, ConfigError]:
    if environment.token is None:
        return Err(ConfigError("I don't see the GITHUB_TOKEN in the environment."))
    return Ok(environment.token)


def load_event_payload(path: Path) -> Result[StrDict, ConfigError]:
    """Read the webhook payload the runner wrote to ``GITHUB_EVENT_PATH``."""
    try:
        obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Event payload not found: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Error reading event payload: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON in event payload: {e}", path=path))

    data = as_str_dict(obj)
    if data is None:
        return Err(ConfigError("Event payload must be a JSON object", path=path))
    return Ok(data)


def write_outputs(path: Path, outputs: Mapping[str, str]) -> Result[None, ConfigError]:
    """Append ``key=value`` lines to the step output file."""
    lines = "".join(f"{key}={value}\n" for key, value in outputs.items())
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
    except OSError as e:
        return Err(ConfigError(f"Cannot write step outputs: {e}", path=path))
    return Ok(None)
