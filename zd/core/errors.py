"""Error codes for CLI exit status.

Each value is a process exit code. GitHub Actions marks the step as failed for
any non-zero code; the distinct values make the failing layer visible in logs.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unsupported event, malformed event payload)
    - 2: Environment error (missing token, unreadable config)
    - 3: Consistency error (CITATION.cff and target file disagree)
    - 4: Network error (GitHub API request failed)
    - 5: Git error (a git command exited non-zero)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    CONSISTENCY_ERROR = 3
    NETWORK_ERROR = 4
    GIT_ERROR = 5
