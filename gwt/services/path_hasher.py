"""Deterministic, collision-free worktree path suffixes."""

import hashlib
import os

from gwt.exceptions import WorktreePathError
from gwt.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_HASH_LENGTH = 7
DEFAULT_MAX_ATTEMPTS = 10000


def _hash_token(value: str, length: int) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:length]


def compute_suffix(
    base_path: str,
    branch: str,
    length: int = DEFAULT_HASH_LENGTH,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Compute the hash suffix for a new worktree of ``branch``.

    The first candidate hashes the branch name alone. While
    ``<base_path>-<token>`` exists on disk, a counter (1, 2, ...) is
    appended to the branch name and rehashed.

    Args:
        base_path: Path of the main worktree
        branch: Branch name the worktree is created for
        length: Number of hex characters in the token
        max_attempts: Upper bound on probes before giving up

    Returns:
        Hex token such that ``<base_path>-<token>`` does not exist

    Raises:
        WorktreePathError: If every probe collided
    """
    for counter in range(max_attempts):
        seed = branch if counter == 0 else f"{branch}{counter}"
        token = _hash_token(seed, length)
        candidate = f"{base_path}-{token}"
        if not os.path.exists(candidate):
            if counter:
                logger.debug(f"Path collision for {branch}, using counter {counter}: {token}")
            return token

    raise WorktreePathError(base_path, branch, max_attempts)


def worktree_path_for(base_path: str, branch: str, length: int = DEFAULT_HASH_LENGTH) -> str:
    """Full sibling path for a new worktree of ``branch``."""
    return f"{base_path}-{compute_suffix(base_path, branch, length=length)}"
