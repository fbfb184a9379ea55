import logging

import pytest
from typer.testing import CliRunner

from git_feed import __version__
from git_feed.cli import app
from git_feed.utils.logging import format_timestamp, setup_logging, timestamp_formatter
from git_feed.config import LoggingConfig
from git_feed.errors import ConfigError


runner = CliRunner()


def _write_config(tmp_path, repo_root, extra=""):
    path = tmp_path / "feed.yaml"
    path.write_text(
        f"""
repo: {repo_root}
base-url: https://x/y/
channel-title: Changes
channel-link: https://x/
channel-description: Site changes
item-title-page-new: "New %p"
{extra}
""",
        encoding="utf-8",
    )
    return path


def test_cli_writes_compact_feed(git_repo, tmp_path):
    git_repo.write("content/a.md")
    git_repo.commit("add")
    conf = _write_config(tmp_path, git_repo.root)

    result = runner.invoke(app, ["-c", str(conf), "-p", "content/", "content"])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith('<?xml version="1.0" encoding="utf-8"?><rss version="2.0">')
    assert "<title>New a.html</title>" in result.stdout
    assert "<link>https://x/y/a.html</link>" in result.stdout
    assert not result.stdout.endswith("\n")


def test_cli_pretty_output(git_repo, tmp_path):
    git_repo.write("a.md")
    git_repo.commit("add")
    conf = _write_config(tmp_path, git_repo.root)

    result = runner.invoke(app, ["--conf", str(conf), "--pretty", "."])

    assert result.exit_code == 0, result.output
    assert result.stdout.endswith("</rss>\n")
    assert "\n  <channel>\n" in result.stdout


def test_cli_reads_config_from_stdin(git_repo, tmp_path):
    git_repo.write("a.md")
    git_repo.commit("add")
    conf = _write_config(tmp_path, git_repo.root)

    result = runner.invoke(app, ["-c", "-", "."], input=conf.read_text(encoding="utf-8"))

    assert result.exit_code == 0, result.output
    assert "<link>https://x/y/a.html</link>" in result.stdout


def test_cli_reports_config_errors(tmp_path):
    conf = tmp_path / "bad.yaml"
    conf.write_text("base-url: https://x/\n", encoding="utf-8")

    result = runner.invoke(app, ["-c", str(conf), "."])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "channel-title" in result.output
    assert "<rss" not in result.output


def test_cli_reports_invalid_ttl(git_repo, tmp_path):
    git_repo.write("a.md")
    git_repo.commit("add")
    conf = _write_config(tmp_path, git_repo.root, "ttl: [1]")

    result = runner.invoke(app, ["-c", str(conf), "."])

    assert result.exit_code == 1
    assert "ttl" in result.output


def test_cli_requires_path_and_conf(tmp_path):
    assert runner.invoke(app, ["."]).exit_code != 0
    assert runner.invoke(app, ["-c", str(tmp_path / "feed.yaml")]).exit_code != 0


def test_cli_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_debug_flag_lowers_level():
    logger = setup_logging(LoggingConfig(level="ERROR"), debug=True)

    assert logger.level == logging.DEBUG
    assert setup_logging(LoggingConfig(level="ERROR")).level == logging.ERROR


def test_log_file_uses_jsonl(tmp_path):
    log_path = tmp_path / "logs" / "run.jsonl"
    logger = setup_logging(LoggingConfig(level="INFO", file=str(log_path)))

    logger.info("hello", extra={"event": "greeting"})
    for handler in logger.handlers:
        handler.flush()

    line = log_path.read_text(encoding="utf-8").strip()
    assert '"message": "hello"' in line
    assert '"event": "greeting"' in line
    logger.handlers = []


def test_timestamp_precision():
    from datetime import datetime, timezone

    when = datetime(2020, 9, 13, 12, 26, 40, 123456, tzinfo=timezone.utc)

    assert timestamp_formatter(None) is None
    assert format_timestamp(when, 0) == "2020-09-13T12:26:40Z"
    assert format_timestamp(when, 3) == "2020-09-13T12:26:40.123Z"
    assert format_timestamp(when, 6) == "2020-09-13T12:26:40.123456Z"
    assert format_timestamp(when, 9) == "2020-09-13T12:26:40.123456000Z"
    assert timestamp_formatter("milli")(when).plain == "2020-09-13T12:26:40.123Z"
    assert timestamp_formatter("bogus")(when).plain == "2020-09-13T12:26:40Z"


def test_cli_reports_unwritable_log_file(git_repo, tmp_path):
    git_repo.write("a.md")
    git_repo.commit("add")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory\n", encoding="utf-8")
    conf = _write_config(tmp_path, git_repo.root, f"log-file: {blocker}/sub/log.jsonl")

    result = runner.invoke(app, ["-c", str(conf), "."])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "Cannot open log" in result.output
    assert "<rss" not in result.output


def test_setup_logging_rejects_unwritable_log_file(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(ConfigError):
        setup_logging(LoggingConfig(file=str(blocker / "log.jsonl")))
