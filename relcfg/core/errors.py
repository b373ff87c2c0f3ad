"""Error codes for CLI exit status.

The values map to shell exit codes and are used consistently by every
command to signal what kind of failure occurred.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad arguments, unreadable or malformed release config)
    - 2: Environment error (invalid relcfg.toml settings)
    - 3: Check failed (release config violates a structural property)
    - 4: I/O error (cannot write output file)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    CHECK_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
