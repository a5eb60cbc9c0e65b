"""Data models for gwt."""

from .branch import BranchExistence
from .result import CommandResult
from .worktree import WorktreeRecord

__all__ = ["BranchExistence", "CommandResult", "WorktreeRecord"]
