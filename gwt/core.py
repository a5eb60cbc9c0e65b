"""Core worktree commands for gwt"""

import os
from pathlib import Path
from typing import Dict, List, Optional, TYPE_CHECKING

from gwt.config import Config
from gwt.exceptions import (
    GitOperationError,
    GwtError,
    ProtectedBranchError,
    WorktreeNotFoundError,
)
from gwt.logging_config import get_logger
from gwt.models.branch import BranchExistence
from gwt.models.result import CommandResult
from gwt.models.worktree import WorktreeRecord
from gwt.services.branches import BranchResolver
from gwt.services.path_hasher import worktree_path_for
from gwt.services.worktrees import WorktreeService

if TYPE_CHECKING:
    from gwt.services.prompts import Prompter

logger = get_logger(__name__)

WORKTREE_PLACEHOLDER = "Select worktree..."
REMOVE_PLACEHOLDER = "Select worktree to remove..."


def is_within(path: str, root: str) -> bool:
    """True if ``path`` is ``root`` or lies below it."""
    resolved_path = Path(path).resolve()
    resolved_root = Path(root).resolve()
    return resolved_path == resolved_root or resolved_root in resolved_path.parents


class WorktreeManager:
    """User-facing worktree commands.

    Every command returns a CommandResult. A result carrying a directory
    asks the calling shell to change into it; the process working directory
    is never modified here.
    """

    def __init__(
        self,
        repo_path: str,
        config: Optional[Config] = None,
        prompter: Optional["Prompter"] = None,
        cwd: Optional[str] = None,
    ):
        """Initialize the manager.

        Args:
            repo_path: Path inside the git repository
            config: Configuration, defaults to Config()
            prompter: Prompt backend for picks and confirmations
            cwd: Directory the command was started from, defaults to os.getcwd()
        """
        if prompter is None:
            from gwt.services.prompts import get_prompter

            prompter = get_prompter((config or Config()).prompt_backend)

        self.repo_path = repo_path
        self.config = config or Config()
        self.prompter = prompter
        self.cwd = cwd or os.getcwd()
        self.worktrees = WorktreeService(repo_path)
        self.branches = BranchResolver(repo_path, prompter, self.config.remote_name)

    def _pick_worktree(
        self, records: List[WorktreeRecord], placeholder: str
    ) -> Optional[WorktreeRecord]:
        """Let the user pick one of ``records``; None if cancelled."""
        by_line: Dict[str, WorktreeRecord] = {record.display_line(): record for record in records}
        selected = self.prompter.filter(list(by_line), placeholder=placeholder)
        if not selected:
            return None

        record = by_line.get(selected)
        if record is None:
            # Unknown line, fall back to its first field as the path
            path = selected.split()[0]
            record = next((r for r in records if r.path == path), None)
            if record is None:
                raise WorktreeNotFoundError(path)
        return record

    def add(self, branch_arg: Optional[str] = None) -> CommandResult:
        """Create a worktree for a branch and switch to it.

        Args:
            branch_arg: Branch name or filter text; None opens the branch picker
        """
        branch = self.branches.resolve(branch_arg)
        if not branch:
            return CommandResult(exit_code=1, message="No branch selected.")

        # Normalize first: check-ref-format expands @{-N} to a real branch
        branch = self.branches.validate_name(branch)
        if branch in self.config.protected_branches:
            raise ProtectedBranchError(branch)

        main_path = self.worktrees.main_worktree_path()
        worktree_path = worktree_path_for(main_path, branch, length=self.config.hash_length)
        existence = self.branches.classify(branch)
        logger.info(f"Adding worktree for {branch} ({existence.value}) at {worktree_path}")

        if existence == BranchExistence.LOCAL:
            success, error = self.worktrees.add_worktree(worktree_path, branch)
        elif existence == BranchExistence.REMOTE_ONLY:
            success, error = self.worktrees.add_tracking_worktree(
                worktree_path, branch, self.config.remote_name
            )
        else:
            if not self.prompter.confirm(f"Branch '{branch}' doesn't exist. Create it?"):
                return CommandResult(exit_code=0, message="Aborted.")
            success, error = self.worktrees.add_worktree_new_branch(worktree_path, branch)

        if not success:
            raise GitOperationError("worktree add", branch, error)

        return CommandResult.switched(worktree_path)

    def remove(self, force: bool = False) -> CommandResult:
        """Interactively remove a linked worktree.

        Args:
            force: Pass --force to git worktree remove
        """
        linked = self.worktrees.linked_worktrees()
        if not linked:
            return CommandResult(exit_code=0, message="No additional worktrees to remove.")

        record = self._pick_worktree(linked, REMOVE_PLACEHOLDER)
        if record is None:
            return CommandResult(exit_code=0, message="No worktree selected.")

        worktree_path = record.path
        if not self.prompter.confirm(f"Remove worktree at '{worktree_path}'?"):
            return CommandResult(exit_code=0, message="Aborted.")

        directory = None
        service = self.worktrees
        if is_within(self.cwd, worktree_path):
            # Leave the worktree before deleting it
            directory = self.worktrees.main_worktree_path()
            service = WorktreeService(directory)
            logger.info(f"Current directory is inside {worktree_path}, moving to {directory}")

        success, error = service.remove_worktree(worktree_path, force=force)
        if not success:
            raise GitOperationError(
                "worktree remove", message=f"{error}. Try with -f/--force flag."
            )

        return CommandResult(
            exit_code=0, message=f"Removed worktree: {worktree_path}", directory=directory
        )

    def jump_to_default(self, override: Optional[str] = None) -> CommandResult:
        """Switch to the worktree of the default branch.

        Args:
            override: Branch to use instead of detecting the default
        """
        branch = override or self.branches.detect_default_branch()
        if not branch:
            raise GwtError("Could not detect default branch (main/master).")

        record = self.worktrees.find_by_branch(branch)
        if record is None:
            raise WorktreeNotFoundError(branch)

        return CommandResult.switched(record.path)

    def jump_to_branch(self, branch: str) -> CommandResult:
        """Switch to the worktree that has ``branch`` checked out."""
        record = self.worktrees.find_by_branch(branch)
        if record is None:
            raise WorktreeNotFoundError(branch, f"Use 'gwt add {branch}' to create one.")

        return CommandResult.switched(record.path)

    def interactive_pick(self) -> CommandResult:
        """Pick any worktree, main included, and switch to it."""
        records = self.worktrees.list_worktrees()
        if not records:
            raise GwtError("No worktrees found.")

        record = self._pick_worktree(records, WORKTREE_PLACEHOLDER)
        if record is None:
            return CommandResult(exit_code=0, message="No worktree selected.")

        return CommandResult.switched(record.path)
