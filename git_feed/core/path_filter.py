"""
Glob matching of repository paths against the ignore list.

Patterns use gitignore-style wildmatch semantics: a pattern without a
slash matches at any depth, a pattern that matches a directory also
matches everything below it, ``**`` spans directories, and a leading
``!`` re-includes paths excluded by an earlier pattern.
"""

from __future__ import annotations

from typing import Iterable

import pathspec


class PathFilter:
    """Compiled set of ignore patterns.

    Examples:
        >>> PathFilter(["secrets/*"]).matches("secrets/key.txt")
        True
        >>> PathFilter(["*.tmp"]).matches("dir/scratch.tmp")
        True
        >>> PathFilter(None).matches("anything")
        False
    """

    def __init__(self, patterns: Iterable[str] | None):
        self._spec: pathspec.PathSpec | None = None
        if patterns is not None:
            self._spec = pathspec.PathSpec.from_lines("gitwildmatch", patterns)

    def matches(self, path: str) -> bool:
        """Return True when the path is ignored."""
        if self._spec is None:
            return False
        return self._spec.match_file(path)
