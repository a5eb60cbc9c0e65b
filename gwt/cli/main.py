"""Command-line entry point for gwt"""

import os
import sys
from typing import List, Optional, TYPE_CHECKING

from rich.console import Console

from gwt.cli.args import parse_args
from gwt.exceptions import GwtError
from gwt.logging_config import get_logger, setup_logging
from gwt.models.result import CommandResult
from gwt.preflight import check_git_installed, open_repository
from gwt.shell import get_shell_init, write_cd_file

if TYPE_CHECKING:
    from gwt.core import WorktreeManager

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)
logger = get_logger(__name__)


def dispatch(
    manager: "WorktreeManager",
    command: Optional[str],
    argument: Optional[str] = None,
    force: bool = False,
) -> CommandResult:
    """Route one command word to its handler."""
    logger.debug(f"Dispatching command={command!r} argument={argument!r} force={force}")
    if command == "add":
        return manager.add(argument)
    if command in ("remove", "rm"):
        return manager.remove(force=force)
    if command in ("main", "master"):
        return manager.jump_to_default(command)
    if not command:
        return manager.interactive_pick()
    return manager.jump_to_branch(command)


def report(result: CommandResult) -> None:
    """Print the result message and hand the directory to the shell."""
    if result.directory:
        write_cd_file(result.directory)
    if result.message:
        if result.ok:
            console.print(result.message, markup=False)
        else:
            err_console.print(result.message, markup=False)


def build_manager(parsed_args, cwd: str) -> "WorktreeManager":
    """Run the environment checks and build a WorktreeManager.

    Raises:
        MissingDependencyError: If git or the prompt tool is missing
        NotInRepositoryError: If ``cwd`` is not inside a git working tree
    """
    check_git_installed()
    repo = open_repository(cwd)

    # GitPython is only imported once git is known to exist
    from gwt.config import Config
    from gwt.core import WorktreeManager
    from gwt.services.prompts import get_prompter

    try:
        config = Config.from_git_config(
            repo,
            remote_name=parsed_args.remote,
            prompt_backend=parsed_args.prompt,
            verbose=parsed_args.verbose or None,
            debug=parsed_args.debug or None,
        )
    finally:
        repo.close()

    prompter = get_prompter(config.prompt_backend)
    prompter.check_available()

    return WorktreeManager(repo.working_tree_dir, config, prompter, cwd=cwd)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    if parsed_args.init:
        print(get_shell_init(parsed_args.init))
        return 0

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    try:
        manager = build_manager(parsed_args, os.getcwd())
        result = dispatch(manager, parsed_args.command, parsed_args.argument, parsed_args.force)
    except KeyboardInterrupt:
        err_console.print("\nOperation cancelled by user", style="yellow", markup=False)
        return 1
    except (GwtError, ValueError) as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1

    report(result)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
