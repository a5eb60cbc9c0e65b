"""Branch resolution service for gwt."""

import git
from typing import List, Optional, TYPE_CHECKING

from gwt.exceptions import BranchResolutionError, GitOperationError
from gwt.models.branch import BranchExistence
from gwt.logging_config import get_logger
from gwt.services.worktrees import format_git_error

if TYPE_CHECKING:
    from gwt.services.prompts import Prompter

logger = get_logger(__name__)

BRANCH_PLACEHOLDER = "Select branch..."
DEFAULT_BRANCH_FALLBACKS = ("main", "master")
LS_REMOTE_NO_MATCH = 2


class BranchResolver:
    """Resolves user input to a branch and classifies where it exists."""

    def __init__(self, repo_path: str, prompter: "Prompter", remote_name: str = "origin"):
        """Initialize the branch resolver.

        Args:
            repo_path: Path to the git repository
            prompter: Prompt backend used for interactive picks
            remote_name: Remote queried for remote-only branches
        """
        self.repo_path = repo_path
        self.prompter = prompter
        self.remote_name = remote_name

    def _get_repo(self):
        return git.Repo(self.repo_path, search_parent_directories=True)

    def list_local_branches(self) -> List[str]:
        """Short names of all local branches.

        Raises:
            GitOperationError: If git cannot list branches
        """
        try:
            output = self._get_repo().git.branch("--format=%(refname:short)")
        except git.exc.GitCommandError as e:
            raise GitOperationError("branch list", message=format_git_error("git branch", e))
        return [line.strip() for line in output.splitlines() if line.strip()]

    def is_local_branch(self, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        try:
            self._get_repo().git.show_ref("--verify", "--quiet", f"refs/heads/{branch}")
            return True
        except git.exc.GitCommandError:
            return False

    def exists_on_remote(self, branch: str) -> bool:
        """Check whether the remote advertises refs/heads/<branch>."""
        try:
            output = self._get_repo().git.ls_remote(
                "--exit-code", "--heads", self.remote_name, branch
            )
        except git.exc.GitCommandError as e:
            # --exit-code reports "no matching ref" as status 2
            if e.status != LS_REMOTE_NO_MATCH:
                logger.warning(
                    f"Could not query {self.remote_name} for {branch}, treating it as absent: "
                    f"{format_git_error('git ls-remote', e)}"
                )
            return False

        # ls-remote patterns match on path suffix, so compare the full ref
        wanted = f"refs/heads/{branch}"
        return any(line.split("\t")[-1].strip() == wanted for line in output.splitlines())

    def classify(self, branch: str) -> BranchExistence:
        """Classify a branch as local, remote-only or nonexistent.

        A local branch is LOCAL regardless of the remote.
        """
        if self.is_local_branch(branch):
            existence = BranchExistence.LOCAL
        elif self.exists_on_remote(branch):
            existence = BranchExistence.REMOTE_ONLY
        else:
            existence = BranchExistence.NONEXISTENT
        logger.debug(f"Branch {branch} classified as {existence.value}")
        return existence

    def validate_name(self, branch: str) -> str:
        """Validate a branch name against git's ref naming rules.

        Raises:
            BranchResolutionError: If git rejects the name
        """
        try:
            return self._get_repo().git.check_ref_format("--branch", branch).strip()
        except git.exc.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise BranchResolutionError(branch, stderr or "not a valid branch name")

    def resolve(self, explicit: Optional[str] = None) -> Optional[str]:
        """Resolve a branch from user input.

        An exact local branch name is returned without prompting. Anything
        else opens the branch picker, pre-filled with the input if given.
        The picker is not strict, so a typed name that matches no local
        branch (a remote or new branch) can be submitted as is.

        Returns:
            The branch name, or None if the user cancelled the pick
        """
        if explicit and self.is_local_branch(explicit):
            return explicit

        branches = self.list_local_branches()
        selected = self.prompter.filter(
            branches, placeholder=BRANCH_PLACEHOLDER, value=explicit or None, strict=False
        )
        if not selected:
            return None
        return selected.strip() or None

    def detect_default_branch(self) -> Optional[str]:
        """Detect the default branch.

        Uses the remote's symbolic HEAD, then falls back to a local main,
        then master.
        """
        remote_head = f"refs/remotes/{self.remote_name}/HEAD"
        prefix = f"refs/remotes/{self.remote_name}/"
        try:
            ref = self._get_repo().git.symbolic_ref(remote_head).strip()
            if ref.startswith(prefix) and len(ref) > len(prefix):
                return ref[len(prefix):]
        except git.exc.GitCommandError:
            logger.debug(f"{remote_head} is not set")

        for candidate in DEFAULT_BRANCH_FALLBACKS:
            if self.is_local_branch(candidate):
                return candidate
        return None
