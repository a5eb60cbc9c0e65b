"""Custom exceptions for gwt"""

from typing import Optional


class GwtError(Exception):
    """Base exception for all gwt errors."""
    pass


class MissingDependencyError(GwtError):
    """Exception raised when a required external tool is not installed."""

    def __init__(self, tool: str, hint: Optional[str] = None):
        self.tool = tool
        self.hint = hint

        error_msg = f"{tool} is not installed."
        if hint:
            error_msg = f"{tool} is not installed. {hint}"

        super().__init__(error_msg)


class NotInRepositoryError(GwtError):
    """Exception raised when the current directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("Not in a git repository.")


class GitOperationError(GwtError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class BranchResolutionError(GwtError):
    """Exception raised when a branch name cannot be resolved or is invalid."""

    def __init__(self, branch: str, message: Optional[str] = None):
        self.branch = branch
        self.message = message

        error_msg = f"Invalid branch name '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ProtectedBranchError(GwtError):
    """Exception raised when attempting to create a worktree for main/master."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"Cannot create worktree for {branch}. Use 'gwt {branch}' to jump to it."
        )


class WorktreeNotFoundError(GwtError):
    """Exception raised when no worktree has the requested branch checked out."""

    def __init__(self, branch: str, hint: Optional[str] = None):
        self.branch = branch
        self.hint = hint

        error_msg = f"No worktree found for branch '{branch}'."
        if hint:
            error_msg += f" {hint}"

        super().__init__(error_msg)


class WorktreePathError(GwtError):
    """Exception raised when no free worktree path can be derived."""

    def __init__(self, base_path: str, branch: str, attempts: int):
        self.base_path = base_path
        self.branch = branch
        self.attempts = attempts
        super().__init__(
            f"Could not find a free worktree path for '{branch}' next to {base_path} "
            f"after {attempts} attempts"
        )
