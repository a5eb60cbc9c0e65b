"""Pytest fixtures for gwt tests"""
import tempfile
from pathlib import Path
from typing import Optional, Sequence

import pytest
import git

from gwt.config import Config
from gwt.core import WorktreeManager
from gwt.services.prompts import Prompter


class FakePrompter(Prompter):
    """Prompter that replays scripted answers and records every call.

    Entries in ``selections`` are either the line to return, None for a
    cancelled pick, or a callable taking the offered options.
    """

    name = "fake"

    def __init__(self, selections=None, confirms=None):
        self.selections = list(selections or [])
        self.confirms = list(confirms or [])
        self.filter_calls = []
        self.confirm_calls = []

    def filter(
        self,
        options: Sequence[str],
        placeholder: Optional[str] = None,
        value: Optional[str] = None,
        strict: bool = True,
    ) -> Optional[str]:
        options = list(options)
        self.filter_calls.append(
            {"options": options, "placeholder": placeholder, "value": value, "strict": strict}
        )
        selection = self.selections.pop(0) if self.selections else None
        if callable(selection):
            return selection(options)
        return selection

    def confirm(self, message: str) -> bool:
        self.confirm_calls.append(message)
        return self.confirms.pop(0) if self.confirms else False

    @property
    def prompted(self) -> bool:
        return bool(self.filter_calls or self.confirm_calls)


def pick_containing(text: str):
    """Selection callable choosing the first option containing ``text``."""
    def choose(options):
        return next(option for option in options if text in option)
    return choose


def commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    """Write a file in the repo's working tree and commit it."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Default configuration."""
    return Config()


@pytest.fixture
def prompter():
    """Scriptable prompter; set ``selections`` and ``confirms`` in the test."""
    return FakePrompter()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with a main branch."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with two extra local branches."""
    git_repo.git.branch("feature/login")
    git_repo.git.branch("bugfix/crash")
    yield git_repo


@pytest.fixture
def git_repo_with_remote(git_repo, temp_dir):
    """Repository whose origin is a local bare repository.

    origin has main, develop and feature/remote-only; the last one has no
    local branch and no remote-tracking ref in the clone.
    """
    origin_path = temp_dir / "origin.git"
    origin = git.Repo.init(origin_path, bare=True)

    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("origin", "main")

    git_repo.git.checkout("-b", "develop")
    commit_file(git_repo, "develop.txt", "develop\n", "Develop work")
    git_repo.git.push("origin", "develop")

    git_repo.git.checkout("-b", "feature/remote-only")
    commit_file(git_repo, "remote.txt", "remote\n", "Remote work")
    git_repo.git.push("origin", "feature/remote-only")

    git_repo.git.checkout("main")
    git_repo.git.branch("-D", "feature/remote-only")
    git_repo.git.update_ref("-d", "refs/remotes/origin/feature/remote-only")

    yield git_repo

    origin.close()


@pytest.fixture
def manager(git_repo, config, prompter):
    """WorktreeManager running from the main worktree."""
    return WorktreeManager(git_repo.working_tree_dir, config, prompter, cwd=git_repo.working_tree_dir)
