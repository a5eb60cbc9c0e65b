"""Shell integration: let the calling shell follow directory switches."""

import os
from pathlib import Path

from gwt.logging_config import get_logger

logger = get_logger(__name__)

CD_FILE_ENV = "GWT_CD_FILE"

SHELL_WRAPPER = """
# gwt shell integration
export GWT_CD_FILE="${TMPDIR:-/tmp}/.gwt_cd_$$"

gwt() {
    rm -f "$GWT_CD_FILE"
    command gwt "$@"
    local exit_code=$?

    if [[ -f "$GWT_CD_FILE" ]]; then
        cd "$(cat "$GWT_CD_FILE")"
        rm -f "$GWT_CD_FILE"
    fi

    return $exit_code
}
"""

COMPLETION_BASH = """
_gwt_complete() {
    local cur="${COMP_WORDS[COMP_CWORD]}"
    if [[ $COMP_CWORD -eq 1 ]]; then
        local words="add remove rm main master $(git branch --format='%(refname:short)' 2>/dev/null)"
        COMPREPLY=($(compgen -W "$words" -- "$cur"))
    elif [[ "${COMP_WORDS[1]}" == "add" ]]; then
        COMPREPLY=($(compgen -W "$(git branch --format='%(refname:short)' 2>/dev/null)" -- "$cur"))
    fi
}
complete -F _gwt_complete gwt
"""

COMPLETION_ZSH = """
_gwt() {
    local -a commands branches
    commands=('add:Create a worktree' 'remove:Remove a worktree' 'rm:Remove a worktree' 'main:Jump to main' 'master:Jump to master')
    branches=(${(f)"$(git branch --format='%(refname:short)' 2>/dev/null)"})
    if (( CURRENT == 2 )); then
        _describe 'command' commands
        _describe 'branch' branches
    elif [[ $words[2] == add ]]; then
        _describe 'branch' branches
    fi
}
compdef _gwt gwt
"""

SHELLS = {
    "bash": SHELL_WRAPPER + COMPLETION_BASH,
    "zsh": SHELL_WRAPPER + COMPLETION_ZSH,
}


def get_shell_init(shell: str) -> str:
    """Shell code to eval from the user's rc file."""
    try:
        return SHELLS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell '{shell}', expected one of {sorted(SHELLS)}")


def write_cd_file(path: str) -> bool:
    """Write ``path`` to $GWT_CD_FILE for the shell wrapper to cd into.

    Returns:
        True if the file was written, False when no wrapper is active
    """
    cd_file = os.environ.get(CD_FILE_ENV)
    if not cd_file:
        logger.debug(f"{CD_FILE_ENV} not set, shell will not change directory")
        return False

    Path(cd_file).write_text(path)
    logger.debug(f"Wrote {path} to {cd_file}")
    return True
