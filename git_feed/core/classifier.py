"""
Classification of tree-diff deltas into feed statuses.

Only added, deleted and modified files become feed items. Everything
else git can report (typechanges, unmerged entries, renames or copies if
they ever show up) is logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..utils.logging import log_event
from .types import ChangeDelta, Commit, DeltaStatus


@dataclass(frozen=True)
class Classification:
    """The feed status of a delta and the path the item is built from."""

    status: DeltaStatus
    path: str


def classify_delta(
    commit: Commit,
    delta: ChangeDelta,
    logger: logging.Logger | None = None,
) -> Classification | None:
    """Classify one delta of a commit.

    Args:
        commit: The commit the delta belongs to, used for diagnostics
        delta: The changed path
        logger: Logger receiving the warning for unhandled statuses

    Returns:
        A Classification for added/deleted/modified files, otherwise None
    """
    if delta.status is DeltaStatus.ADDED:
        return Classification(DeltaStatus.ADDED, delta.new_path)
    if delta.status is DeltaStatus.DELETED:
        return Classification(DeltaStatus.DELETED, delta.old_path)
    if delta.status is DeltaStatus.MODIFIED:
        return Classification(DeltaStatus.MODIFIED, delta.new_path)

    log_event(
        logger,
        f"Unhandled diff state {delta.status.name} for commit {commit.id} "
        f"between {delta.old_path!r} and {delta.new_path!r}",
        level=logging.WARNING,
        event="unhandled_delta",
        commit=commit.id,
        status=delta.status.name,
        old_path=delta.old_path,
        new_path=delta.new_path,
    )
    return None
