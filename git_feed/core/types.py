"""
Core data types for git-feed.

This module defines the records that flow through the pipeline:
- Commit: One commit read from the repository
- ChangeDelta: One changed path in a commit's tree diff
- FeedItem: One RSS item derived from a surviving delta
- FeedChannel: The assembled RSS channel with its items
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


NO_RSS_MARKER = "no-rss"


class DeltaStatus(str, Enum):
    """Status of a changed path, keyed by git's raw diff status letter."""

    ADDED = "A"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    COPIED = "C"
    TYPECHANGE = "T"
    UNMERGED = "U"
    UNKNOWN = "X"

    @classmethod
    def from_letter(cls, letter: str) -> "DeltaStatus":
        # Renames and copies carry a similarity score, e.g. "R100".
        try:
            return cls(letter[:1])
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Commit:
    """A commit as read from the repository.

    Attributes:
        id: Full hex object id
        author_name: Author name, may be empty
        author_email: Author email, may be empty
        author_time: Author timestamp in seconds since the epoch
        author_offset: Author UTC offset in minutes
        parents: Parent commit ids, in order
        message: Raw commit message
    """

    id: str
    author_name: str
    author_email: str
    author_time: int
    author_offset: int
    parents: tuple[str, ...] = ()
    message: str = ""

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def opted_out(self) -> bool:
        """True when a line of the message is exactly the ``no-rss`` marker."""
        return any(line == NO_RSS_MARKER for line in self.message.splitlines())


@dataclass(frozen=True)
class ChangeDelta:
    """A single file-level change between two trees.

    ``old_path`` is meaningful for deleted and modified files, ``new_path``
    for added and modified ones.
    """

    status: DeltaStatus
    old_path: str
    new_path: str


@dataclass(frozen=True)
class FeedItem:
    """One RSS item.

    Attributes:
        author: "<email> (<name>)"
        pub_date: RFC 2822 date carrying the author's original offset
        title: Templated title, or None when no template is configured
        link: Absolute URL of the changed page
    """

    author: str
    pub_date: str
    title: str | None
    link: str


@dataclass(frozen=True)
class FeedChannel:
    """The RSS channel, ready for serialization."""

    title: str
    link: str
    description: str
    language: str | None = None
    copyright: str | None = None
    managing_editor: str | None = None
    webmaster: str | None = None
    pub_date: str | None = None
    last_build_date: str | None = None
    generator: str | None = None
    ttl: int | None = None
    skip_hours: tuple[int, ...] = ()
    skip_days: tuple[int, ...] = ()
    items: tuple[FeedItem, ...] = field(default_factory=tuple)
