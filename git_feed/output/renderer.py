from __future__ import annotations

import xml.etree.ElementTree as ET

from ..core.types import FeedChannel, FeedItem


XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
INDENT = "  "


def render_rss(channel: FeedChannel, pretty: bool = False) -> str:
    """Serialize the channel as an RSS 2.0 document.

    Compact output has no newline at the end; pretty output is indented by
    two spaces and ends with a newline.
    """
    rss = ET.Element("rss", {"version": "2.0"})
    rss.append(_channel_element(channel))

    if pretty:
        ET.indent(rss, space=INDENT)
        return XML_DECLARATION + "\n" + ET.tostring(rss, encoding="unicode") + "\n"
    return XML_DECLARATION + ET.tostring(rss, encoding="unicode")


def _channel_element(channel: FeedChannel) -> ET.Element:
    element = ET.Element("channel")
    _text(element, "title", channel.title, required=True)
    _text(element, "link", channel.link, required=True)
    _text(element, "description", channel.description, required=True)
    _text(element, "language", channel.language)
    _text(element, "copyright", channel.copyright)
    _text(element, "managingEditor", channel.managing_editor)
    _text(element, "webMaster", channel.webmaster)
    _text(element, "pubDate", channel.pub_date)
    _text(element, "lastBuildDate", channel.last_build_date)
    _text(element, "generator", channel.generator)
    _text(element, "ttl", None if channel.ttl is None else str(channel.ttl))
    _list(element, "skipHours", "hour", channel.skip_hours)
    _list(element, "skipDays", "day", channel.skip_days)
    for item in channel.items:
        element.append(_item_element(item))
    return element


def _item_element(item: FeedItem) -> ET.Element:
    element = ET.Element("item")
    _text(element, "title", item.title)
    _text(element, "link", item.link)
    _text(element, "author", item.author)
    _text(element, "pubDate", item.pub_date)
    return element


def _text(parent: ET.Element, tag: str, value: str | None, required: bool = False) -> None:
    if value is None and not required:
        return
    ET.SubElement(parent, tag).text = value or ""


def _list(parent: ET.Element, tag: str, child_tag: str, values: tuple[int, ...]) -> None:
    if not values:
        return
    element = ET.SubElement(parent, tag)
    for value in values:
        ET.SubElement(element, child_tag).text = str(value)
