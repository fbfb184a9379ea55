"""
Mapping of repository paths to public URLs.
"""

from __future__ import annotations

from urllib.parse import quote, urljoin

from ..errors import UrlError


MARKDOWN_SUFFIX = ".md"

# Characters left unescaped in the relative link; RFC 3986 pchar plus "/".
_PATH_SAFE = "/!$&'()*+,;=:@~"


def derive_url_path(path: str, strip_prefix: str) -> str:
    """Turn a repository path into the site-relative path of its page.

    The prefix is removed only when the path starts with it; otherwise the
    path is used unchanged. A trailing ``md`` of a ``.md`` file is replaced
    by ``html``, reusing the dot.

    Examples:
        >>> derive_url_path("content/posts/a.md", "content/")
        'posts/a.html'
        >>> derive_url_path("static/logo.png", "content/")
        'static/logo.png'
    """
    start = len(strip_prefix) if path.startswith(strip_prefix) else 0
    if path.endswith(MARKDOWN_SUFFIX):
        return path[start : len(path) - 2] + "html"
    return path[start:]


def build_link(base_url: str, url_path: str) -> str:
    """Resolve a url path against the base URL.

    Uses relative reference resolution, so a base without a trailing slash
    loses its last segment: ``https://x/y`` + ``a.html`` gives
    ``https://x/a.html``.
    """
    try:
        return urljoin(base_url, quote(url_path, safe=_PATH_SAFE))
    except ValueError as exc:
        raise UrlError(f"Cannot join {url_path!r} onto {base_url!r}: {exc}") from exc
