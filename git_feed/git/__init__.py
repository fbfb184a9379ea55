"""
Repository access through the git command-line tool.
"""

from .repository import Repository, open_repository, parse_raw_diff
from .runner import run_git_command

__all__ = ["Repository", "open_repository", "parse_raw_diff", "run_git_command"]
