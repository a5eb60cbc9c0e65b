"""Worktree data models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class WorktreeRecord:
    """One entry of ``git worktree list --porcelain``."""

    path: str
    branch: Optional[str]  # None for detached HEAD or bare
    head_commit: str
    is_main: bool = False  # First entry in the listing
    is_bare: bool = False
    locked: bool = False
    prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return self.branch is None and not self.is_bare

    def display_line(self) -> str:
        """Render the record the way ``git worktree list`` does.

        The path is always the first whitespace-delimited field.
        """
        if self.is_bare:
            return f"{self.path}  (bare)"

        line = f"{self.path}  {self.head_commit[:7]}"
        if self.branch:
            line += f" [{self.branch}]"
        else:
            line += " (detached HEAD)"
        if self.locked:
            line += " locked"
        if self.prunable:
            line += " prunable"
        return line

    def __str__(self) -> str:
        main_marker = " (main)" if self.is_main else ""
        return f"{self.branch or '(detached)'} @ {self.path}{main_marker}"
