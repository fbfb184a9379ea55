"""
Feed serialization.
"""

from .renderer import render_rss

__all__ = ["render_rss"]
