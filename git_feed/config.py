"""
Configuration management using YAML documents and dataclasses.

The configuration document is a flat YAML mapping with hyphenated keys.
It is loaded into these sections:
- RepoConfig: Repository location, base URL, prefix stripping, ignore list
- ItemConfig: Per-status item title templates
- ChannelConfig: RSS channel fields
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import sys
from typing import Any
from urllib.parse import urlparse

import yaml

from .core.types import DeltaStatus
from .errors import ConfigError, UrlError
from .utils.duration import parse_duration


TITLE_KEYS = {
    DeltaStatus.ADDED: "item-title-page-new",
    DeltaStatus.DELETED: "item-title-page-removed",
    DeltaStatus.MODIFIED: "item-title-page-modified",
}

NETWORK_SCHEMES = {"http", "https"}


@dataclass
class RepoConfig:
    """Configuration for repository access and link derivation.

    Attributes:
        path: Repository path; None discovers it from the working directory
        base_url: Absolute URL that item links are resolved against
        strip_prefix: Leading path prefix removed before building links
        ignore_files: Glob patterns of files that never produce items
    """

    path: str | None = None
    base_url: str = ""
    strip_prefix: str = ""
    ignore_files: list[str] | None = None


@dataclass
class ItemConfig:
    """Title templates for feed items. ``%p`` is replaced by the URL path.

    Attributes:
        title_new: Template for added files
        title_removed: Template for deleted files
        title_modified: Template for modified files
    """

    title_new: str | None = None
    title_removed: str | None = None
    title_modified: str | None = None

    def template_for(self, status: DeltaStatus) -> str | None:
        if status is DeltaStatus.ADDED:
            return self.title_new
        if status is DeltaStatus.DELETED:
            return self.title_removed
        if status is DeltaStatus.MODIFIED:
            return self.title_modified
        return None


@dataclass
class ChannelConfig:
    """RSS channel fields taken directly from configuration.

    Attributes:
        title: Channel title (required)
        link: Channel link (required)
        description: Channel description (required)
        language: Optional language code
        copyright: Optional copyright notice
        managing_editor: Optional managing editor address
        webmaster: Optional webmaster address
        generator: Optional generator name
        ttl: Optional cache lifetime in minutes
        skip_hours: Hours (0-23) aggregators may skip
        skip_days: Days (0-6) aggregators may skip
    """

    title: str = ""
    link: str = ""
    description: str = ""
    language: str | None = None
    copyright: str | None = None
    managing_editor: str | None = None
    webmaster: str | None = None
    generator: str | None = None
    ttl: int | None = None
    skip_hours: list[int] = field(default_factory=list)
    skip_days: list[int] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level when --debug is not given
        file: Optional log file path
        format: Log file format ("jsonl" or "plain")
        timestamp: Console timestamp precision; None disables timestamps
    """

    level: str = "WARNING"
    file: str | None = None
    format: str = "jsonl"
    timestamp: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    repo: RepoConfig = field(default_factory=RepoConfig)
    item: ItemConfig = field(default_factory=ItemConfig)
    channel: ChannelConfig = field(default_factory=ChannelConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(source: str) -> AppConfig:
    """Load configuration from a YAML file, or from stdin when source is "-".

    Raises:
        ConfigError: If the document cannot be read or parsed, or a required
            key is missing
        UrlError: If base-url is not an absolute URL
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(source, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {source}: {exc}") from exc
    return parse_config(text)


def parse_config(text: str) -> AppConfig:
    """Parse a YAML config document into an AppConfig.

    When the stream holds several documents the last one is used.
    """
    try:
        documents = list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config: {exc}") from exc

    if not documents:
        raise ConfigError("Config document is empty")
    raw = documents[-1]
    if not isinstance(raw, dict):
        raise ConfigError("Config document must be a mapping")

    return _fromdict(raw)


def parse_ttl(value: Any) -> int | None:
    """Convert a ttl config value to minutes.

    Integers are taken as minutes; strings are parsed as durations and
    truncated to whole minutes.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError("Invalid value of config entry 'ttl'")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(parse_duration(value).total_seconds()) // 60
        except ValueError as exc:
            raise ConfigError(f"Invalid value of config entry 'ttl': {exc}") from exc
    raise ConfigError("Invalid value of config entry 'ttl'")


def parse_int_list(value: Any) -> list[int]:
    """Keep only the integer entries of a list; anything else yields []."""
    if not isinstance(value, list):
        return []
    return [x for x in value if isinstance(x, int) and not isinstance(x, bool)]


def validate_base_url(value: str) -> str:
    """Require an absolute URL: a scheme, plus a host for http(s)."""
    parsed = urlparse(value)
    if not parsed.scheme or (parsed.scheme in NETWORK_SCHEMES and not parsed.netloc):
        raise UrlError(f"Invalid base-url {value!r}: expected an absolute URL")
    return value


def _fromdict(raw: dict[str, Any]) -> AppConfig:
    """Build AppConfig from the flat hyphenated mapping."""
    ignore = raw.get("ignore-files")
    return AppConfig(
        repo=RepoConfig(
            path=_optional_str(raw, "repo"),
            base_url=validate_base_url(_required_str(raw, "base-url")),
            strip_prefix=_optional_str(raw, "strip-prefix") or "",
            ignore_files=(
                [x for x in ignore if isinstance(x, str)]
                if isinstance(ignore, list)
                else None
            ),
        ),
        item=ItemConfig(
            title_new=_optional_str(raw, TITLE_KEYS[DeltaStatus.ADDED]),
            title_removed=_optional_str(raw, TITLE_KEYS[DeltaStatus.DELETED]),
            title_modified=_optional_str(raw, TITLE_KEYS[DeltaStatus.MODIFIED]),
        ),
        channel=ChannelConfig(
            title=_required_str(raw, "channel-title"),
            link=_required_str(raw, "channel-link"),
            description=_required_str(raw, "channel-description"),
            language=_optional_str(raw, "language"),
            copyright=_optional_str(raw, "copyright"),
            managing_editor=_optional_str(raw, "managing-editor"),
            webmaster=_optional_str(raw, "webmaster"),
            generator=_optional_str(raw, "generator"),
            ttl=parse_ttl(raw.get("ttl")),
            skip_hours=parse_int_list(raw.get("skip-hours")),
            skip_days=parse_int_list(raw.get("skip-days")),
        ),
        logging=LoggingConfig(
            level=_optional_str(raw, "log-level") or "WARNING",
            file=_optional_str(raw, "log-file"),
            format=_optional_str(raw, "log-format") or "jsonl",
        ),
    )


def _required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"Missing required config entry '{key}'")
    return value


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    return value if isinstance(value, str) else None
