"""Command-line argument parsing for gwt."""

import argparse
from typing import List, Optional

from gwt.__version__ import __version__
from gwt.config import PROMPT_BACKENDS
from gwt.shell import SHELLS

USAGE = """
    gwt                     Interactive worktree selection
    gwt add [branch]        Create and switch to new worktree
                            (interactive branch picker if omitted)
    gwt main                Jump to main branch worktree
    gwt master              Jump to master branch worktree
    gwt <branch>            Jump to specific branch worktree
    gwt remove [-f|--force] Remove worktrees interactively
    gwt --help              Display this help message"""

EPILOG = """
Dependencies:
    - gum (https://github.com/charmbracelet/gum), unless --prompt textual
    - git with worktree support

Shell integration:
    eval "$(gwt --init bash)"   # or zsh, lets gwt change your directory

Examples:
    gwt                     # Pick from existing worktrees
    gwt add                 # Pick branch interactively, create worktree
    gwt add feature/login   # Create worktree for feature/login branch
    gwt add feat            # Filter branches starting with "feat"
    gwt main                # Jump to main branch worktree
    gwt remove              # Interactively remove a worktree
    gwt remove -f           # Force remove a worktree
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the gwt argument parser."""
    parser = argparse.ArgumentParser(
        prog="gwt",
        usage=USAGE,
        description="gwt - Git Worktree Manager",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        help="add, remove/rm, main, master, or a branch name to jump to",
    )
    parser.add_argument("argument", nargs="?", default=None, help="Branch name for add")
    parser.add_argument(
        "-f", "--force", action="store_true", help="Force removal of dirty or locked worktrees"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--prompt",
        choices=PROMPT_BACKENDS,
        default=None,
        help="Prompt backend (default: gwt.prompt from git config, else gum)",
    )
    parser.add_argument(
        "--remote",
        metavar="NAME",
        default=None,
        help="Remote used for remote branches (default: gwt.remote from git config, else origin)",
    )
    parser.add_argument(
        "--init",
        choices=sorted(SHELLS),
        metavar="SHELL",
        default=None,
        help="Print shell integration for bash or zsh and exit",
    )
    parser.add_argument("--version", action="version", version=f"gwt {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
