from __future__ import annotations

import pytest

from zd.cli.commands.common import release_error_code
from zd.core.errors import ErrorCode
from zd.release.errors import ReleaseError, ReleaseErrorKind


def test_codes_are_stable() -> None:
    assert [int(c) for c in ErrorCode] == [0, 1, 2, 3, 4, 5]


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("missing_token", ErrorCode.ENV_ERROR),
        ("unsupported_event", ErrorCode.USER_ERROR),
        ("unsupported_action", ErrorCode.USER_ERROR),
        ("invalid_payload", ErrorCode.USER_ERROR),
        ("inconsistent_versions", ErrorCode.CONSISTENCY_ERROR),
        ("api_failed", ErrorCode.NETWORK_ERROR),
        ("git_failed", ErrorCode.GIT_ERROR),
    ],
)
def test_release_error_kinds_map_to_exit_codes(kind: ReleaseErrorKind, code: ErrorCode) -> None:
    assert release_error_code(kind) == code


def test_release_error_pretty() -> None:
    assert ReleaseError(kind="git_failed", message="push failed").pretty() == "push failed"
    assert (
        ReleaseError(kind="git_failed", message="push failed", hint="denied").pretty()
        == "push failed (hint: denied)"
    )
