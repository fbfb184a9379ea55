"""
Assembly of feed items and the RSS channel.

Items are collected together with the raw author timestamp of their
commit. The channel is built once the walk is complete: items are
stable-sorted by that timestamp, and the first and last item supply the
channel's publish and last-build dates.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import TYPE_CHECKING

from ..errors import IdentityError
from .types import Commit, FeedChannel, FeedItem

if TYPE_CHECKING:
    from ..config import ChannelConfig


URL_PATH_TOKEN = "%p"


def rfc2822_time(seconds: int, offset_minutes: int) -> str:
    """Format an epoch timestamp as RFC 2822 in the given UTC offset.

    Examples:
        >>> rfc2822_time(0, 120)
        'Thu, 01 Jan 1970 02:00:00 +0200'
    """
    tz = timezone(timedelta(minutes=offset_minutes))
    return format_datetime(datetime.fromtimestamp(seconds, tz))


def format_author(commit: Commit) -> str:
    """Return ``"<email> (<name>)"`` for the commit author.

    Raises:
        IdentityError: If the author name or email is empty
    """
    if not commit.author_email:
        raise IdentityError(f"Commit {commit.id} has no author email")
    if not commit.author_name:
        raise IdentityError(f"Commit {commit.id} has no author name")
    return f"{commit.author_email} ({commit.author_name})"


def render_title(template: str | None, url_path: str) -> str | None:
    if template is None:
        return None
    return template.replace(URL_PATH_TOKEN, url_path)


def build_item(
    *,
    author: str,
    pub_date: str,
    title_template: str | None,
    url_path: str,
    link: str,
) -> FeedItem:
    """Construct a FeedItem from its parts."""
    return FeedItem(
        author=author,
        pub_date=pub_date,
        title=render_title(title_template, url_path),
        link=link,
    )


class FeedAssembler:
    """Accumulates items in walk order and builds the channel at the end."""

    def __init__(self, channel: ChannelConfig):
        self._channel = channel
        self._entries: list[tuple[int, FeedItem]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, timestamp: int, item: FeedItem) -> None:
        self._entries.append((timestamp, item))

    def sorted_items(self) -> list[FeedItem]:
        # sorted() is stable, so equal timestamps keep walk order.
        return [item for _, item in sorted(self._entries, key=lambda entry: entry[0])]

    def build_channel(self) -> FeedChannel:
        items = self.sorted_items()
        cfg = self._channel
        return FeedChannel(
            title=cfg.title,
            link=cfg.link,
            description=cfg.description,
            language=cfg.language,
            copyright=cfg.copyright,
            managing_editor=cfg.managing_editor,
            webmaster=cfg.webmaster,
            pub_date=items[0].pub_date if items else None,
            last_build_date=items[-1].pub_date if items else None,
            generator=cfg.generator,
            ttl=cfg.ttl,
            skip_hours=tuple(cfg.skip_hours),
            skip_days=tuple(cfg.skip_days),
            items=tuple(items),
        )
