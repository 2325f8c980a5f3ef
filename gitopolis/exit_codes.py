"""
Standard exit codes for gitopolis commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # Any repo skipped/failed, or a command error
NO_REPOS = 2             # `list` found nothing to show


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class StateError(CommandError):
    """Raised when the repository list cannot be read or written."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class RepoNotFoundError(CommandError):
    """Raised when a named repository is not in the repository list."""
    def __init__(self, path: str):
        super().__init__(f"Repo '{path}' not found", GENERAL_ERROR)
        self.path = path


class ShellSpawnError(CommandError):
    """
    Raised when the shell cannot be started or waited on.

    A broken shell environment cannot be worked around repo-by-repo,
    so this aborts the whole exec run.
    """
    def __init__(self, program: str, cause: Optional[BaseException] = None):
        message = f"Failed to run shell '{program}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, GENERAL_ERROR)
        self.program = program
