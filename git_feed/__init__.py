"""
git-feed - RSS feed of a git repository's file history.

Every file added, removed or modified by a non-merge commit becomes one
feed item, ordered by author time. Typical use is a static site whose
pages live in git:

Example:
    $ git-feed -c feed.yaml -p content/ content/ > feed.xml
"""

__all__ = ["__version__", "run_pipeline", "load_config", "render_rss"]
__version__ = "0.1.0"

from .config import load_config
from .output.renderer import render_rss
from .runner import run_pipeline
