"""Environment checks run before any command is dispatched."""

import shutil
from typing import TYPE_CHECKING

from gwt.exceptions import MissingDependencyError, NotInRepositoryError
from gwt.logging_config import get_logger

if TYPE_CHECKING:
    import git

logger = get_logger(__name__)


def check_git_installed() -> None:
    """Make sure the git executable is on PATH.

    Runs before GitPython is imported, since importing it without git fails.
    """
    if shutil.which("git") is None:
        raise MissingDependencyError("git")


def open_repository(path: str) -> "git.Repo":
    """Open the repository containing ``path``.

    Raises:
        NotInRepositoryError: If ``path`` is not inside a git working tree
    """
    import git

    try:
        repo = git.Repo(path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
        raise NotInRepositoryError(path)

    if repo.bare or not repo.working_tree_dir:
        raise NotInRepositoryError(path)

    logger.debug(f"Repository working tree: {repo.working_tree_dir}")
    return repo
