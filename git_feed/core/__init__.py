"""
Core domain models and the commit-to-item derivation logic.

This package is independent of how the repository is accessed and how
the feed is serialized.
"""

from .types import ChangeDelta, Commit, DeltaStatus, FeedChannel, FeedItem
from .classifier import Classification, classify_delta
from .path_filter import PathFilter
from .urls import build_link, derive_url_path
from .assembler import FeedAssembler, build_item, format_author, rfc2822_time

__all__ = [
    "ChangeDelta",
    "Commit",
    "DeltaStatus",
    "FeedChannel",
    "FeedItem",
    "Classification",
    "classify_delta",
    "PathFilter",
    "build_link",
    "derive_url_path",
    "FeedAssembler",
    "build_item",
    "format_author",
    "rfc2822_time",
]
