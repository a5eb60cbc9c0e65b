"""Configuration handling for gwt"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from gwt.logging_config import get_logger

if TYPE_CHECKING:
    import git

logger = get_logger(__name__)

PROMPT_BACKENDS = ["gum", "textual"]

# git config keys under the [gwt] section
GIT_CONFIG_SECTION = "gwt"
GIT_CONFIG_KEYS = {
    "remote": "remote_name",
    "prompt": "prompt_backend",
    "hashLength": "hash_length",
}


@dataclass
class Config:
    """Configuration for gwt with validation."""

    remote_name: str = "origin"
    prompt_backend: str = "gum"  # gum, textual
    hash_length: int = 7
    # Branches that are navigation-only and never get their own worktree
    protected_branches: List[str] = field(default_factory=lambda: ["main", "master"])

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_remote_name()
        self._validate_prompt_backend()
        self._validate_hash_length()
        self._validate_protected_branches()

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def _validate_prompt_backend(self):
        """Validate prompt_backend is one of allowed values."""
        if self.prompt_backend not in PROMPT_BACKENDS:
            raise ValueError(
                f"prompt_backend must be one of {PROMPT_BACKENDS}, got '{self.prompt_backend}'"
            )

    def _validate_hash_length(self):
        """Validate hash_length fits a SHA-1 hex digest."""
        self.hash_length = int(self.hash_length)
        if not 4 <= self.hash_length <= 40:
            raise ValueError(f"hash_length must be between 4 and 40, got {self.hash_length}")

    def _validate_protected_branches(self):
        """Validate protected_branches list."""
        if not isinstance(self.protected_branches, list):
            raise ValueError("protected_branches must be a list")

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "remote_name": self.remote_name,
            "prompt_backend": self.prompt_backend,
            "hash_length": self.hash_length,
            "protected_branches": self.protected_branches,
            "verbose": self.verbose,
            "debug": self.debug,
        }

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys and None values."""
        known_fields = {
            "remote_name",
            "prompt_backend",
            "hash_length",
            "protected_branches",
            "verbose",
            "debug",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields and v is not None}
        return cls(**filtered)

    @classmethod
    def from_git_config(cls, repo: "git.Repo", **overrides) -> "Config":
        """Build a Config from the [gwt] section of git config.

        Keyword overrides (typically parsed CLI arguments) win over git
        config values unless they are None.
        """
        values = {}
        reader = repo.config_reader()
        try:
            for key, attr in GIT_CONFIG_KEYS.items():
                if reader.has_option(GIT_CONFIG_SECTION, key):
                    values[attr] = reader.get_value(GIT_CONFIG_SECTION, key)
                    logger.debug(f"git config {GIT_CONFIG_SECTION}.{key} = {values[attr]}")
        finally:
            reader.release()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.from_dict(values)
