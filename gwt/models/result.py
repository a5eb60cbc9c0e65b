"""Command result model."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CommandResult:
    """Outcome of a single gwt command.

    ``directory`` is where the calling shell should change into. Handlers
    never change the working directory of the process themselves.
    """

    exit_code: int = 0
    message: Optional[str] = None
    directory: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @classmethod
    def switched(cls, path: str) -> "CommandResult":
        """Result for a successful directory switch."""
        return cls(exit_code=0, message=f"Switched to: {path}", directory=path)
