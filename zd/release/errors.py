"""Error type shared by every step of the release sync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "missing_token",
    "unsupported_event",
    "unsupported_action",
    "invalid_payload",
    "inconsistent_versions",
    "git_failed",
    "api_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``hint`` carries the underlying detail (git stderr, API message) when
    there is one, so the CLI can print it under the main message.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
