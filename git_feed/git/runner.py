"""
Git command runner.

All repository access goes through the ``git`` command-line tool. The
runner adds ``safe.directory`` for the repository so that one owned by
another user (sudo, containers, CI checkouts) can still be read, and
turns command failures into RepositoryError.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from ..errors import RepositoryError


def get_git_environment(repo_dir: Path) -> dict[str, str]:
    """Environment for git commands run against ``repo_dir``.

    Appends a ``safe.directory`` entry after any GIT_CONFIG_* entries the
    caller already set.
    """
    env = os.environ.copy()
    try:
        count = int(env.get("GIT_CONFIG_COUNT", "0"))
    except ValueError:
        count = 0
    env[f"GIT_CONFIG_KEY_{count}"] = "safe.directory"
    env[f"GIT_CONFIG_VALUE_{count}"] = str(repo_dir.resolve())
    env["GIT_CONFIG_COUNT"] = str(count + 1)
    # Output is parsed, never shown to a user.
    env["GIT_TERMINAL_PROMPT"] = "0"
    env.pop("GIT_PAGER", None)
    return env


def run_git_command(cmd: list[str], cwd: Path) -> str:
    """Run a git command and return its decoded stdout.

    Args:
        cmd: Git command as a list (e.g., ["git", "rev-parse", "HEAD"])
        cwd: Working directory for the command

    Returns:
        The command's standard output

    Raises:
        ValueError: If the command does not start with "git"
        RepositoryError: If git is missing, exits non-zero, or prints
            output that is not valid UTF-8
    """
    if not cmd or cmd[0] != "git":
        raise ValueError("Command must start with 'git'")

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            capture_output=True,
            env=get_git_environment(cwd),
        )
    except OSError as exc:
        raise RepositoryError(f"Cannot run git in {cwd}: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        stderr = exc.stderr.decode("utf-8", errors="replace").strip()
        raise RepositoryError(
            f"git {' '.join(cmd[1:3])} failed in {cwd}: {stderr or f'exit status {exc.returncode}'}"
        ) from exc

    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RepositoryError(f"git {' '.join(cmd[1:3])} printed non UTF-8 output: {exc}") from exc
