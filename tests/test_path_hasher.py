"""Tests for worktree path hashing"""
import hashlib

import pytest

from gwt.exceptions import WorktreePathError
from gwt.services.path_hasher import compute_suffix, worktree_path_for


def sha1_prefix(value, length=7):
    return hashlib.sha1(value.encode()).hexdigest()[:length]


class TestComputeSuffix:
    """Test suffix generation."""

    def test_first_candidate_hashes_branch_name(self, temp_dir):
        """Without collisions the token is the SHA-1 prefix of the branch name."""
        base = str(temp_dir / "repo")
        assert compute_suffix(base, "feature/login") == sha1_prefix("feature/login")

    def test_deterministic(self, temp_dir):
        """Repeated calls return the same token while nothing exists."""
        base = str(temp_dir / "repo")
        first = compute_suffix(base, "feature/login")
        assert compute_suffix(base, "feature/login") == first
        assert len(first) == 7

    def test_different_branches_differ(self, temp_dir):
        base = str(temp_dir / "repo")
        assert compute_suffix(base, "feature/a") != compute_suffix(base, "feature/b")

    def test_collision_uses_counter(self, temp_dir):
        """An existing first candidate moves on to branch + '1'."""
        base = str(temp_dir / "repo")
        (temp_dir / f"repo-{sha1_prefix('feature/login')}").mkdir()

        token = compute_suffix(base, "feature/login")

        assert token == sha1_prefix("feature/login1")
        assert not (temp_dir / f"repo-{token}").exists()

    def test_collision_with_file(self, temp_dir):
        """Any existing filesystem entry counts as a collision."""
        base = str(temp_dir / "repo")
        (temp_dir / f"repo-{sha1_prefix('fix')}").write_text("occupied")
        (temp_dir / f"repo-{sha1_prefix('fix1')}").mkdir()

        assert compute_suffix(base, "fix") == sha1_prefix("fix2")

    def test_custom_length(self, temp_dir):
        base = str(temp_dir / "repo")
        assert compute_suffix(base, "feature/login", length=12) == sha1_prefix("feature/login", 12)

    def test_max_attempts_guard(self, temp_dir):
        base = str(temp_dir / "repo")
        (temp_dir / f"repo-{sha1_prefix('x')}").mkdir()
        (temp_dir / f"repo-{sha1_prefix('x1')}").mkdir()

        with pytest.raises(WorktreePathError):
            compute_suffix(base, "x", max_attempts=2)


class TestWorktreePathFor:
    """Test full path composition."""

    def test_composes_sibling_path(self, temp_dir):
        base = str(temp_dir / "repo")
        assert worktree_path_for(base, "main-work") == f"{base}-{sha1_prefix('main-work')}"
