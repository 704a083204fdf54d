"""
errors.py - Error Types

Every failure the core raises derives from KebabifyError, so callers can
catch one type at the CLI/GUI boundary.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models_fs import GitStatus, RenameCommand


class KebabifyError(Exception):
    """Base class for all kebabify errors"""


class RootNotFoundError(KebabifyError, FileNotFoundError):
    """A given root directory does not exist"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Directory does not exist: {path}")


class RootNotADirectoryError(KebabifyError, NotADirectoryError):
    """A given root path exists but is not a directory"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path is not a directory: {path}")


class DirtyTreeError(KebabifyError):
    """Uncommitted modifications present and the run was not forced"""

    def __init__(self, status: "GitStatus", repositories: List[str]):
        self.status = status
        self.repositories = repositories
        super().__init__(
            "Git repository has uncommitted modified files in: "
            f"{', '.join(repositories)}. Please commit or stash your changes first."
        )


class PlanConflictError(KebabifyError):
    """Two entries would be renamed to the same destination"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("Rename plan has conflicts:\n" + "\n".join(f"  - {e}" for e in errors))


class ExecutionError(KebabifyError):
    """A move command failed; remaining commands were not attempted"""

    def __init__(
        self,
        command: "RenameCommand",
        command_line: str,
        stderr: str = "",
        stdout: str = "",
        returncode: Optional[int] = None,
        signal: Optional[str] = None,
    ):
        self.command = command
        self.command_line = command_line
        self.stderr = stderr
        self.stdout = stdout
        self.returncode = returncode
        self.signal = signal

        lines = [f"Command failed: {command_line}"]
        if stderr.strip():
            lines.append(f"Stderr: {stderr.strip()}")
        if stdout.strip():
            lines.append(f"Stdout: {stdout.strip()}")
        if returncode is not None:
            lines.append(f"Exit code: {returncode}")
        if signal:
            lines.append(f"Signal: {signal}")
        super().__init__("\n".join(lines))

    @property
    def leftover_temp_path(self) -> Optional[str]:
        """Temporary path left on disk if the failure split a case-only pair.

        The first command of a pair moves the entry to its temporary name; if
        the second one fails, the entry stays there until recovered.
        """
        if self.command.is_temp_source:
            return self.command.src
        return None
