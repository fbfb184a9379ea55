"""
Main pipeline orchestration for git-feed.

This module coordinates the whole run:
1. Open the repository
2. Walk commits oldest-first, skipping merges and opted-out commits
3. Diff each commit against its parent, restricted to the path filters
4. Classify deltas and drop ignored paths
5. Derive page URLs and build one item per surviving delta
6. Assemble the time-ordered channel

The repository is only read; nothing is cached between runs.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .config import AppConfig
from .core.assembler import FeedAssembler, build_item, format_author, rfc2822_time
from .core.classifier import classify_delta
from .core.path_filter import PathFilter
from .core.types import Commit, FeedChannel
from .core.urls import build_link, derive_url_path
from .git.repository import Repository, open_repository
from .utils.logging import log_event


def run_pipeline(
    cfg: AppConfig,
    paths: Sequence[str],
    logger: logging.Logger,
    strip_prefix: str | None = None,
    repository: Repository | None = None,
) -> FeedChannel:
    """Build the feed channel from the repository's history.

    Args:
        cfg: Application configuration
        paths: Pathspecs restricting which files are diffed
        logger: Logger for progress and diagnostics
        strip_prefix: Overrides ``cfg.repo.strip_prefix`` when given
        repository: Already opened repository; opened from ``cfg.repo.path``
            when None

    Returns:
        The assembled FeedChannel

    Raises:
        RepositoryError: If the repository cannot be opened, walked or diffed
        IdentityError: If a commit author lacks a name or email
        UrlError: If a link cannot be built
    """
    prefix = cfg.repo.strip_prefix if strip_prefix is None else strip_prefix
    for path in paths:
        log_event(logger, f"using path filter {path}", event="path_filter", path=path)

    ignored = PathFilter(cfg.repo.ignore_files)
    repo = repository or open_repository(cfg.repo.path, logger)
    assembler = FeedAssembler(cfg.channel)

    for commit in repo.walk():
        if commit.is_merge:
            log_event(
                logger,
                f"Skipping merge commit {commit.id}",
                level=logging.DEBUG,
                event="skip_merge",
                commit=commit.id,
            )
            continue
        if commit.opted_out:
            log_event(
                logger,
                f'Skipping commit {commit.id}, because of "no-rss"',
                event="skip_no_rss",
                commit=commit.id,
            )
            continue
        _collect_items(cfg, repo, commit, paths, prefix, ignored, assembler, logger)

    log_event(logger, f"Assembled {len(assembler)} feed items", event="pipeline_done", count=len(assembler))
    return assembler.build_channel()


def _collect_items(
    cfg: AppConfig,
    repo: Repository,
    commit: Commit,
    paths: Sequence[str],
    prefix: str,
    ignored: PathFilter,
    assembler: FeedAssembler,
    logger: logging.Logger,
) -> None:
    """Add one item to the assembler for every surviving delta of a commit."""
    author = format_author(commit)
    pub_date = rfc2822_time(commit.author_time, commit.author_offset)

    for delta in repo.diff(commit, paths):
        logger.debug("%s %s %r, %r", commit.id, delta.status.name, delta.old_path, delta.new_path)

        classification = classify_delta(commit, delta, logger)
        if classification is None:
            continue

        path = classification.path
        if ignored.matches(path):
            log_event(
                logger,
                f"Skipping delta of ignored file {path} in commit {commit.id}",
                event="skip_ignored",
                commit=commit.id,
                path=path,
            )
            continue

        url_path = derive_url_path(path, prefix)
        assembler.add(
            commit.author_time,
            build_item(
                author=author,
                pub_date=pub_date,
                title_template=cfg.item.template_for(classification.status),
                url_path=url_path,
                link=build_link(cfg.repo.base_url, url_path),
            ),
        )
        log_event(
            logger,
            f"New rss item for {commit.id}:{path}",
            level=logging.DEBUG,
            event="item_added",
            commit=commit.id,
            path=path,
        )
