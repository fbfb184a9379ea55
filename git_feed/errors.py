"""
Error types raised by the feed pipeline.

All of these are fatal: they propagate to the CLI, which prints the
message to stderr and exits non-zero without writing any feed output.
"""

from __future__ import annotations


class GitFeedError(Exception):
    """Base class for all fatal git-feed errors."""


class ConfigError(GitFeedError):
    """Missing or malformed configuration document or value."""


class RepositoryError(GitFeedError):
    """The repository could not be opened, walked or diffed."""


class IdentityError(GitFeedError):
    """A commit author is missing a name or email address."""


class UrlError(GitFeedError):
    """The base URL is invalid or a link could not be joined onto it."""
