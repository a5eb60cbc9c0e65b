"""Interactive prompt backends for gwt.

Two backends are available: ``gum`` (the default) shells out to the gum
binary, ``textual`` renders the same pickers in-process.
"""

import shutil
import subprocess
from typing import List, Optional, Sequence

from gwt.exceptions import MissingDependencyError
from gwt.logging_config import get_logger

logger = get_logger(__name__)

GUM_INSTALL_HINT = "Install it with: brew install gum"


class Prompter:
    """Interface shared by prompt backends."""

    name = "base"

    def filter(
        self,
        options: Sequence[str],
        placeholder: Optional[str] = None,
        value: Optional[str] = None,
        strict: bool = True,
    ) -> Optional[str]:
        """Let the user pick one of ``options``.

        Args:
            options: Lines to choose from
            placeholder: Text shown in the empty filter box
            value: Initial filter text
            strict: If False, typed text matching no option may be submitted

        Returns:
            The chosen line, or None if the pick was cancelled
        """
        raise NotImplementedError

    def confirm(self, message: str) -> bool:
        """Ask a yes/no question. Returns True on yes."""
        raise NotImplementedError

    def check_available(self) -> None:
        """Raise MissingDependencyError if the backend cannot run."""


class GumPrompter(Prompter):
    """Prompts rendered by gum (https://github.com/charmbracelet/gum)."""

    name = "gum"

    def __init__(self, executable: str = "gum"):
        self.executable = executable

    def check_available(self) -> None:
        if shutil.which(self.executable) is None:
            raise MissingDependencyError("gum", GUM_INSTALL_HINT)

    def _run(self, args: List[str], input_text: Optional[str] = None) -> subprocess.CompletedProcess:
        cmd = [self.executable, *args]
        logger.debug(f"Running {cmd}")
        try:
            # gum draws on stderr/tty, only the answer goes to stdout
            return subprocess.run(cmd, input=input_text, stdout=subprocess.PIPE, text=True)
        except FileNotFoundError:
            raise MissingDependencyError("gum", GUM_INSTALL_HINT)

    def filter(
        self,
        options: Sequence[str],
        placeholder: Optional[str] = None,
        value: Optional[str] = None,
        strict: bool = True,
    ) -> Optional[str]:
        args = ["filter"]
        if placeholder:
            args.append(f"--placeholder={placeholder}")
        if value:
            args.append(f"--value={value}")
        if not strict:
            args.append("--no-strict")

        result = self._run(args, input_text="\n".join(options))
        if result.returncode != 0:
            # 1 = nothing chosen, 130 = interrupted
            logger.debug(f"gum filter exited with {result.returncode}")
            return None

        selected = result.stdout.strip()
        return selected or None

    def confirm(self, message: str) -> bool:
        result = self._run(["confirm", message])
        return result.returncode == 0


class TextualPrompter(Prompter):
    """Prompts rendered in-process with textual."""

    name = "textual"

    def filter(
        self,
        options: Sequence[str],
        placeholder: Optional[str] = None,
        value: Optional[str] = None,
        strict: bool = True,
    ) -> Optional[str]:
        from gwt.ui.picker import FilterApp

        app = FilterApp(
            list(options), placeholder=placeholder or "", value=value or "", strict=strict
        )
        selected = app.run()
        return selected or None

    def confirm(self, message: str) -> bool:
        from gwt.ui.picker import ConfirmApp

        return bool(ConfirmApp(message).run())


PROMPTERS = {
    GumPrompter.name: GumPrompter,
    TextualPrompter.name: TextualPrompter,
}


def get_prompter(backend: str) -> Prompter:
    """Create the prompt backend named ``backend``."""
    try:
        return PROMPTERS[backend]()
    except KeyError:
        raise ValueError(f"Unknown prompt backend '{backend}', expected one of {sorted(PROMPTERS)}")
