"""Exit codes for the errx command line.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad input, invalid arguments)
    - 2: Config error (settings file present but unreadable or invalid)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
