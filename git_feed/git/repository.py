"""
Read-only access to a git repository.

The repository is opened once, walked oldest-first from HEAD, and each
commit is diffed tree-to-tree against its parent. Any failure while
walking or diffing is fatal for the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Sequence

from ..core.types import ChangeDelta, Commit, DeltaStatus
from ..errors import RepositoryError
from ..utils.logging import log_event
from .runner import run_git_command


FIELD_SEP = "\x00"
# id, parents, author name, author email, raw author date, raw message.
# With -z each commit is NUL terminated; git refuses NUL inside messages.
LOG_FORMAT = "%H%x00%P%x00%an%x00%ae%x00%ad%x00%B"
LOG_FIELDS = 6
SUBMODULE_MODE = "160000"


class Repository:
    """A git repository opened for reading.

    Commands run from inside the git directory, so pathspecs always apply
    from the top of the tree regardless of where the tool was started.
    """

    def __init__(self, git_dir: Path):
        self.git_dir = git_dir

    def walk(self) -> Iterator[Commit]:
        """Yield commits reachable from HEAD, ancestors before descendants.

        Raises:
            RepositoryError: If HEAD cannot be resolved or the log cannot be read
        """
        output = run_git_command(
            [
                "git",
                "log",
                "--reverse",
                "-z",
                "--date-order",
                "--no-show-signature",
                "--no-color",
                "--encoding=UTF-8",
                "--date=raw",
                f"--format={LOG_FORMAT}",
                "HEAD",
                "--",
            ],
            cwd=self.git_dir,
        )
        for fields in split_log_records(output):
            yield _parse_commit(fields)

    def diff(self, commit: Commit, pathspecs: Sequence[str] = ()) -> list[ChangeDelta]:
        """Changed paths of a non-merge commit against its parent tree.

        A root commit is compared with the empty tree. File-mode-only,
        submodule and whitespace-only changes are ignored, and rename or
        copy detection is off.

        Raises:
            RepositoryError: If the commit is a merge or git fails
        """
        if commit.is_merge:
            raise RepositoryError(f"Cannot diff merge commit {commit.id}")
        revisions = ["--root", commit.id] if commit.is_root else [commit.parents[0], commit.id]
        output = run_git_command(
            [
                "git",
                "diff-tree",
                "-r",
                "-z",
                "--raw",
                "--no-commit-id",
                "--no-renames",
                "--no-ext-diff",
                "--ignore-submodules=all",
                "--ignore-all-space",
                *revisions,
                "--",
                *pathspecs,
            ],
            cwd=self.git_dir,
        )
        return parse_raw_diff(output)


def open_repository(path: str | None, logger: logging.Logger | None = None) -> Repository:
    """Open the repository at ``path``, or discover it from the working directory.

    Discovery honours GIT_DIR and searches parent directories like git does.

    Raises:
        RepositoryError: If no repository can be opened
    """
    start = Path(path) if path else Path.cwd()
    if path:
        log_event(logger, f"Opening git repository {path}", event="repo_open", path=path)
    git_dir = Path(run_git_command(["git", "rev-parse", "--absolute-git-dir"], cwd=start).strip())
    if not path:
        log_event(
            logger,
            f"Successfully opened git repository {git_dir}",
            event="repo_open",
            path=str(git_dir),
        )
    return Repository(git_dir)


def parse_raw_diff(output: str) -> list[ChangeDelta]:
    """Parse ``git diff-tree -z --raw`` output into deltas.

    Each entry is ``:<old mode> <new mode> <old id> <new id> <status>``
    followed by one path, or two for renames and copies. Entries whose
    content id did not change are mode-only changes and are dropped.
    """
    tokens = output.split(FIELD_SEP)
    deltas: list[ChangeDelta] = []
    pos = 0
    while pos < len(tokens):
        meta = tokens[pos]
        if not meta:
            pos += 1
            continue
        if not meta.startswith(":"):
            raise RepositoryError(f"Unexpected diff-tree output: {meta!r}")
        try:
            old_mode, new_mode, old_id, new_id, letter = meta[1:].split(" ")
        except ValueError as exc:
            raise RepositoryError(f"Unexpected diff-tree entry: {meta!r}") from exc
        status = DeltaStatus.from_letter(letter)
        if status in (DeltaStatus.RENAMED, DeltaStatus.COPIED):
            old_path, new_path = tokens[pos + 1], tokens[pos + 2]
            pos += 3
        else:
            old_path = new_path = tokens[pos + 1]
            pos += 2

        if status is DeltaStatus.MODIFIED and old_id == new_id:
            continue
        if SUBMODULE_MODE in (old_mode, new_mode):
            continue
        deltas.append(ChangeDelta(status=status, old_path=old_path, new_path=new_path))
    return deltas


def split_log_records(output: str) -> list[list[str]]:
    """Split ``git log -z`` output into groups of LOG_FIELDS fields per commit."""
    if not output:
        return []
    tokens = output.split(FIELD_SEP)
    if len(tokens) % LOG_FIELDS == 1 and tokens[-1] == "":
        tokens.pop()
    if len(tokens) % LOG_FIELDS:
        raise RepositoryError(f"Unexpected git log output: {len(tokens)} fields")
    return [tokens[i : i + LOG_FIELDS] for i in range(0, len(tokens), LOG_FIELDS)]


def _parse_commit(fields: list[str]) -> Commit:
    commit_id, parents, name, email, raw_date, message = fields
    seconds, offset = _parse_raw_date(commit_id, raw_date)
    return Commit(
        id=commit_id,
        author_name=name,
        author_email=email,
        author_time=seconds,
        author_offset=offset,
        parents=tuple(parents.split()),
        message=message,
    )


def _parse_raw_date(commit_id: str, raw_date: str) -> tuple[int, int]:
    """Split ``"1577880000 +0200"`` into seconds and offset minutes."""
    try:
        seconds, zone = raw_date.split()
        sign = -1 if zone[0] == "-" else 1
        offset = sign * (int(zone[1:3]) * 60 + int(zone[3:5]))
        return int(seconds), offset
    except (ValueError, IndexError) as exc:
        raise RepositoryError(f"Cannot parse author date {raw_date!r} of commit {commit_id}") from exc
