"""Tests for WorktreeService and porcelain parsing"""
from pathlib import Path
from unittest.mock import patch

import git
import pytest

from gwt.exceptions import GitOperationError
from gwt.services.worktrees import WorktreeService, parse_porcelain


PORCELAIN = """worktree /repo
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /repo-abc1234
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature/login

worktree /repo-def5678
HEAD 3333333333333333333333333333333333333333
detached

worktree /repo-locked
HEAD 4444444444444444444444444444444444444444
branch refs/heads/wip
locked reason here
prunable gitdir file points to non-existent location
"""


class TestParsePorcelain:
    """Test parsing of git worktree list --porcelain."""

    def test_parses_all_records(self):
        records = parse_porcelain(PORCELAIN)
        assert [r.path for r in records] == ["/repo", "/repo-abc1234", "/repo-def5678", "/repo-locked"]

    def test_first_record_is_main(self):
        records = parse_porcelain(PORCELAIN)
        assert records[0].is_main is True
        assert all(not r.is_main for r in records[1:])

    def test_strips_branch_ref_prefix(self):
        records = parse_porcelain(PORCELAIN)
        assert records[0].branch == "main"
        assert records[1].branch == "feature/login"
        assert records[1].head_commit == "2" * 40

    def test_detached_head_has_no_branch(self):
        record = parse_porcelain(PORCELAIN)[2]
        assert record.branch is None
        assert record.is_detached is True

    def test_locked_and_prunable_flags(self):
        record = parse_porcelain(PORCELAIN)[3]
        assert record.locked is True
        assert record.prunable is True
        assert record.branch == "wip"

    def test_trailing_record_without_blank_line(self):
        records = parse_porcelain("worktree /repo\nHEAD abc\nbranch refs/heads/main")
        assert len(records) == 1
        assert records[0].branch == "main"

    def test_records_without_blank_separator(self):
        output = "worktree /a\nHEAD 1\nbranch refs/heads/main\nworktree /b\nHEAD 2\nbranch refs/heads/x\n"
        records = parse_porcelain(output)
        assert [(r.path, r.branch) for r in records] == [("/a", "main"), ("/b", "x")]

    def test_ignores_unknown_lines(self):
        records = parse_porcelain("worktree /repo\nHEAD abc\nfuture-field value\nbranch refs/heads/main\n")
        assert records[0].branch == "main"

    def test_bare_entry(self):
        records = parse_porcelain("worktree /repo.git\nbare\n\nworktree /wt\nHEAD abc\nbranch refs/heads/x\n")
        assert records[0].is_bare is True
        assert records[0].is_detached is False
        assert records[0].display_line() == "/repo.git  (bare)"

    def test_empty_output(self):
        assert parse_porcelain("") == []

    def test_display_line_starts_with_path(self):
        records = parse_porcelain(PORCELAIN)
        assert records[1].display_line() == "/repo-abc1234  2222222 [feature/login]"
        assert records[2].display_line() == "/repo-def5678  3333333 (detached HEAD)"
        assert all(r.display_line().split()[0] == r.path for r in records)


class TestWorktreeService:
    """Test WorktreeService against a real repository."""

    def test_list_only_main(self, git_repo):
        service = WorktreeService(git_repo.working_tree_dir)
        records = service.list_worktrees()
        assert len(records) == 1
        assert records[0].path == git_repo.working_tree_dir
        assert records[0].branch == "main"
        assert service.linked_worktrees() == []

    def test_main_worktree_path(self, git_repo):
        service = WorktreeService(git_repo.working_tree_dir)
        assert service.main_worktree_path() == git_repo.working_tree_dir

    def test_add_and_find_worktree(self, git_repo_with_branches, temp_dir):
        service = WorktreeService(git_repo_with_branches.working_tree_dir)
        path = str(temp_dir / "test_repo-login")

        success, error = service.add_worktree(path, "feature/login")

        assert success is True
        assert error is None
        record = service.find_by_branch("feature/login")
        assert record is not None
        assert record.path == path
        assert [r.path for r in service.linked_worktrees()] == [path]

    def test_main_path_from_linked_worktree(self, git_repo_with_branches, temp_dir):
        """The main worktree is reported first even when listing from a linked one."""
        path = str(temp_dir / "test_repo-login")
        WorktreeService(git_repo_with_branches.working_tree_dir).add_worktree(path, "feature/login")

        service = WorktreeService(path)
        assert service.main_worktree_path() == git_repo_with_branches.working_tree_dir

    def test_add_new_branch(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_tree_dir)
        path = str(temp_dir / "test_repo-new")

        success, _ = service.add_worktree_new_branch(path, "feature/new")

        assert success is True
        assert "feature/new" in [h.name for h in git_repo.heads]
        assert service.find_by_branch("feature/new").path == path

    def test_add_missing_branch_fails(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_tree_dir)
        success, error = service.add_worktree(str(temp_dir / "nope"), "does-not-exist")
        assert success is False
        assert "git worktree add failed" in error
        assert not (temp_dir / "nope").exists()

    def test_add_tracking_worktree(self, git_repo_with_remote, temp_dir):
        service = WorktreeService(git_repo_with_remote.working_tree_dir)
        path = str(temp_dir / "test_repo-remote")

        success, error = service.add_tracking_worktree(path, "feature/remote-only", "origin")

        assert success is True, error
        branch = git_repo_with_remote.heads["feature/remote-only"]
        assert branch.tracking_branch().name == "origin/feature/remote-only"
        assert (Path(path) / "remote.txt").exists()

    def test_remove_worktree(self, git_repo_with_branches, temp_dir):
        service = WorktreeService(git_repo_with_branches.working_tree_dir)
        path = str(temp_dir / "test_repo-login")
        service.add_worktree(path, "feature/login")

        success, error = service.remove_worktree(path)

        assert success is True
        assert error is None
        assert not Path(path).exists()
        assert service.linked_worktrees() == []

    def test_remove_dirty_worktree_needs_force(self, git_repo_with_branches, temp_dir):
        service = WorktreeService(git_repo_with_branches.working_tree_dir)
        path = str(temp_dir / "test_repo-login")
        service.add_worktree(path, "feature/login")
        (Path(path) / "scratch.txt").write_text("untracked\n")

        success, error = service.remove_worktree(path)
        assert success is False
        assert "git worktree remove failed" in error

        success, error = service.remove_worktree(path, force=True)
        assert success is True
        assert not Path(path).exists()

    def test_list_failure_raises(self, git_repo):
        service = WorktreeService(git_repo.working_tree_dir)
        with patch.object(service, "_get_repo") as mock_get_repo:
            mock_get_repo.return_value.git.worktree.side_effect = git.exc.GitCommandError(
                "worktree", status=128, stderr="fatal: not a git repository"
            )
            with pytest.raises(GitOperationError, match="not a git repository"):
                service.list_worktrees()
