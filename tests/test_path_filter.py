import pytest

from git_feed.core.path_filter import PathFilter


def test_no_patterns_is_pass_through():
    assert not PathFilter(None).matches("secrets/key.txt")


def test_empty_list_ignores_nothing():
    assert not PathFilter([]).matches("a.md")


@pytest.mark.parametrize(
    "pattern, path",
    [
        ("secrets/*", "secrets/key.txt"),
        ("secrets", "secrets/key.txt"),
        ("secrets/*", "secrets/nested/key.txt"),
        ("*.tmp", "scratch.tmp"),
        ("*.tmp", "dir/scratch.tmp"),
        ("*.tmp", "a/b/c/scratch.tmp"),
        ("drafts/?.md", "drafts/a.md"),
        ("**/*.bak", "a/b/c/page.bak"),
        ("**/*.bak", "page.bak"),
        ("docs/[ab].md", "docs/b.md"),
    ],
)
def test_matches(pattern, path):
    assert PathFilter([pattern]).matches(path)


@pytest.mark.parametrize(
    "pattern, path",
    [
        ("secrets/*", "public/secrets.txt"),
        ("drafts/?.md", "drafts/ab.md"),
        ("Secrets/*", "secrets/key.txt"),
        ("docs/[ab].md", "docs/c.md"),
        ("*.tmp", "scratch.tmpl"),
    ],
)
def test_does_not_match(pattern, path):
    assert not PathFilter([pattern]).matches(path)


def test_negated_pattern_reincludes_path():
    ignored = PathFilter(["drafts/*", "!drafts/keep.md"])

    assert not ignored.matches("drafts/keep.md")
    assert ignored.matches("drafts/other.md")
