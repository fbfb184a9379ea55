import pytest

from git_feed.config import ChannelConfig
from git_feed.core.assembler import (
    FeedAssembler,
    build_item,
    format_author,
    render_title,
    rfc2822_time,
)
from git_feed.core.types import Commit
from git_feed.errors import IdentityError


def _item(link: str, pub_date: str = "Thu, 01 Jan 1970 00:00:00 +0000"):
    return build_item(
        author="ada@example.com (Ada)",
        pub_date=pub_date,
        title_template="New %p",
        url_path=link,
        link=f"https://x/{link}",
    )


def _commit(**kwargs):
    fields = dict(id="c1", author_name="Ada", author_email="ada@example.com", author_time=0, author_offset=0)
    fields.update(kwargs)
    return Commit(**fields)


def test_rfc2822_keeps_original_offset():
    assert rfc2822_time(1600000000, 0) == "Sun, 13 Sep 2020 12:26:40 +0000"
    assert rfc2822_time(1600000000, 120) == "Sun, 13 Sep 2020 14:26:40 +0200"
    assert rfc2822_time(1600000000, -330) == "Sun, 13 Sep 2020 06:56:40 -0530"


def test_format_author():
    assert format_author(_commit()) == "ada@example.com (Ada)"


@pytest.mark.parametrize("field", ["author_name", "author_email"])
def test_format_author_requires_name_and_email(field):
    with pytest.raises(IdentityError):
        format_author(_commit(**{field: ""}))


def test_title_replaces_every_token():
    assert render_title("%p changed (%p)", "a.html") == "a.html changed (a.html)"
    assert render_title(None, "a.html") is None
    assert render_title("Static title", "a.html") == "Static title"


def test_items_are_stably_sorted_by_raw_timestamp():
    assembler = FeedAssembler(ChannelConfig(title="T", link="L", description="D"))
    # The later commit was written in a far-east timezone, so its formatted
    # date sorts before the earlier one as a string.
    assembler.add(200, _item("late", "Thu, 01 Jan 1970 00:03:20 +0000"))
    assembler.add(100, _item("first", "Thu, 01 Jan 1970 09:01:40 +0900"))
    assembler.add(100, _item("second", "Thu, 01 Jan 1970 09:01:40 +0900"))

    channel = assembler.build_channel()

    assert [item.title for item in channel.items] == ["New first", "New second", "New late"]
    assert channel.pub_date == "Thu, 01 Jan 1970 09:01:40 +0900"
    assert channel.last_build_date == "Thu, 01 Jan 1970 00:03:20 +0000"


def test_empty_channel_has_no_dates():
    cfg = ChannelConfig(title="T", link="L", description="D", ttl=15, skip_hours=[3], skip_days=[0])
    channel = FeedAssembler(cfg).build_channel()

    assert channel.items == ()
    assert channel.pub_date is None
    assert channel.last_build_date is None
    assert channel.title == "T"
    assert channel.ttl == 15
    assert channel.skip_hours == (3,)
    assert channel.skip_days == (0,)
