"""Branch model and related enums"""
from enum import Enum


class BranchExistence(Enum):
    """Where a branch exists at resolution time."""
    LOCAL = "local"
    REMOTE_ONLY = "remote-only"
    NONEXISTENT = "nonexistent"
