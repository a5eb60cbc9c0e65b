"""
gwt - Git worktree manager with interactive pickers
"""

from .__version__ import __version__

__all__ = ["__version__"]
