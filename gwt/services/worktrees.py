"""Worktree operations service for gwt."""

import git
from typing import Optional, Dict, Any, List

from gwt.exceptions import GitOperationError
from gwt.models.worktree import WorktreeRecord
from gwt.logging_config import get_logger

logger = get_logger(__name__)

BRANCH_REF_PREFIX = "refs/heads/"


def format_git_error(command: str, e: git.exc.GitCommandError) -> str:
    """Build a readable message from a GitCommandError."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


def _build_record(fields: Dict[str, Any], is_main: bool) -> WorktreeRecord:
    return WorktreeRecord(
        path=fields["path"],
        branch=fields.get("branch"),
        head_commit=fields.get("HEAD", ""),
        is_main=is_main,
        is_bare=fields.get("bare", False),
        locked=fields.get("locked", False),
        prunable=fields.get("prunable", False),
    )


def parse_porcelain(output: str) -> List[WorktreeRecord]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached" / "bare")
        (blank line between worktrees)

    Unknown lines are ignored. The first record is the main worktree.
    """
    records: List[WorktreeRecord] = []
    current: Dict[str, Any] = {}

    def flush():
        if current.get("path"):
            records.append(_build_record(current, is_main=not records))

    for raw_line in output.splitlines():
        line = raw_line.strip()

        if not line:
            flush()
            current = {}
            continue

        key, _, value = line.partition(" ")
        if key == "worktree":
            # A new record may start without a separating blank line
            flush()
            current = {"path": value}
        elif key == "HEAD":
            current["HEAD"] = value
        elif key == "branch":
            if value.startswith(BRANCH_REF_PREFIX):
                current["branch"] = value[len(BRANCH_REF_PREFIX):]
            else:
                current["branch"] = value or None
        elif key == "detached":
            current["branch"] = None
        elif key in ("bare", "locked", "prunable"):
            current[key] = True

    flush()
    return records


class WorktreeService:
    """Service for reading and changing git worktrees."""

    def __init__(self, repo_path: str):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
        """
        self.repo_path = repo_path

    def _get_repo(self):
        """Get a git.Repo instance for the repository.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path, search_parent_directories=True)

    def list_worktrees(self) -> List[WorktreeRecord]:
        """Get all worktrees in listing order, main worktree first.

        Raises:
            GitOperationError: If git cannot list worktrees
        """
        try:
            repo = self._get_repo()
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            raise GitOperationError("worktree list", message=format_git_error("git worktree list", e))

        records = parse_porcelain(output)
        logger.debug(f"Found {len(records)} worktrees")
        for record in records:
            logger.debug(f"  {record}")
        return records

    def main_worktree_path(self) -> str:
        """Path of the main worktree (first entry in the listing)."""
        records = self.list_worktrees()
        if not records:
            raise GitOperationError("worktree list", message="no worktrees reported")
        return records[0].path

    def linked_worktrees(self) -> List[WorktreeRecord]:
        """All worktrees except the main one."""
        return [record for record in self.list_worktrees() if not record.is_main]

    def find_by_branch(self, branch: str) -> Optional[WorktreeRecord]:
        """Find the first worktree with ``branch`` checked out."""
        for record in self.list_worktrees():
            if record.branch == branch:
                return record
        return None

    def add_worktree(self, path: str, branch: str) -> tuple[bool, Optional[str]]:
        """Create a worktree at ``path`` checking out an existing branch.

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        return self._run_add(["add", path, branch], path, branch)

    def add_worktree_new_branch(self, path: str, branch: str) -> tuple[bool, Optional[str]]:
        """Create a new branch from HEAD together with a worktree at ``path``."""
        return self._run_add(["add", "-b", branch, path], path, branch)

    def add_tracking_worktree(
        self, path: str, branch: str, remote: str = "origin"
    ) -> tuple[bool, Optional[str]]:
        """Create a worktree with a local branch tracking ``remote/branch``.

        The remote head is fetched first so the remote-tracking ref exists
        even if the branch was never fetched before.
        """
        remote_ref = f"{remote}/{branch}"
        try:
            repo = self._get_repo()
            repo.git.fetch(remote, f"+{BRANCH_REF_PREFIX}{branch}:refs/remotes/{remote_ref}")
            logger.debug(f"Fetched {remote_ref}")
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git fetch", e)
            logger.error(f"Failed to fetch {remote_ref}: {error_msg}")
            return False, error_msg

        return self._run_add(["add", "--track", "-b", branch, path, remote_ref], path, branch)

    def _run_add(self, args: List[str], path: str, branch: str) -> tuple[bool, Optional[str]]:
        try:
            repo = self._get_repo()
            repo.git.worktree(*args)
            logger.info(f"Created worktree at {path} for branch {branch}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git worktree add", e)
            logger.error(f"Failed to create worktree at {path}: {error_msg}")
            return False, error_msg

    def remove_worktree(self, path: str, force: bool = False) -> tuple[bool, Optional[str]]:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Returns:
            Tuple of (success, error_message). error_message is None on success.
        """
        try:
            repo = self._get_repo()
            args = ["remove", path]
            if force:
                args.append("--force")

            repo.git.worktree(*args)
            logger.info(f"Removed worktree at {path}")
            return True, None
        except git.exc.GitCommandError as e:
            error_msg = format_git_error("git worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            return False, error_msg
