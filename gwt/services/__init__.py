"""Services for gwt."""

from .branches import BranchResolver
from .path_hasher import compute_suffix, worktree_path_for
from .prompts import GumPrompter, Prompter, TextualPrompter, get_prompter
from .worktrees import WorktreeService, parse_porcelain

__all__ = [
    "BranchResolver",
    "compute_suffix",
    "worktree_path_for",
    "GumPrompter",
    "Prompter",
    "TextualPrompter",
    "get_prompter",
    "WorktreeService",
    "parse_porcelain",
]
