"""Tests for the yarn.lock parser and its string helpers."""

import io

import pytest

from lockfile.yarn import YarnLock, dependency_name_from_header, remote_url_from_resolved


YARN_LOCK = """# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"@acme/ui@^1.2.0":
  version "1.2.3"
  resolved "https://npm.acme.io/@acme/ui/-/ui-1.2.3.tgz#0123abcd"
  integrity sha512-abc
  dependencies:
    lodash "^4.17.0"

"@babel/core@^7.0.0", "@babel/core@^7.1.0":
  version "7.1.0"
  resolved "https://registry.yarnpkg.com/@babel/core/-/core-7.1.0.tgz#deadbeef"

lodash@^4.17.0, lodash@^4.17.21:
  version "4.17.21"
  resolved "https://registry.yarnpkg.com/lodash/-/lodash-4.17.21.tgz#679591c5"

left-pad@1.3.0:
  version "1.3.0"
  resolved "https://npm.acme.io/left-pad/-/left-pad-1.3.0.tgz#5b8a3a7c"
"""


def _parse(content):
    lock = YarnLock()
    lock.parse(io.BytesIO(content.encode("utf-8")))
    return lock


class TestDependencyNameFromHeader:
    """Test package name extraction from entry headers."""

    @pytest.mark.parametrize("header,expected", [
        ('"@scope/pkg@1.0.0":', "@scope/pkg"),
        ('"pkg@^2.3.1":', "pkg"),
        ("lodash@^4.17.0, lodash@^4.17.21:", "lodash"),
        ('"@babel/core@^7.0.0", "@babel/core@^7.1.0":', "@babel/core"),
        ('"left-pad@1.3.0":', "left-pad"),
    ])
    def test_names(self, header, expected):
        assert dependency_name_from_header(header) == expected

    @pytest.mark.parametrize("header", ['":', ":", '"@:', "@:"])
    def test_degenerate_headers(self, header):
        assert dependency_name_from_header(header) is None


class TestRemoteUrlFromResolved:
    """Test registry URL extraction from resolved lines."""

    def test_plain_package(self):
        line = '  resolved "https://registry.yarnpkg.com/lodash/-/lodash-4.17.21.tgz#679591c5"'
        assert remote_url_from_resolved(line, "lodash") == "https://registry.yarnpkg.com"

    def test_scoped_package(self):
        line = '  resolved "https://npm.acme.io/@acme/ui/-/ui-1.2.3.tgz#0123abcd"'
        assert remote_url_from_resolved(line, "@acme/ui") == "https://npm.acme.io"

    def test_registry_with_path(self):
        line = '  resolved "https://acme.jfrog.io/api/npm/npm-local/foo/-/foo-1.0.0.tgz"'
        assert remote_url_from_resolved(line, "foo") == "https://acme.jfrog.io/api/npm/npm-local"

    def test_name_segment_missing(self):
        line = '  resolved "https://codeload.github.com/acme/thing/tar.gz/abc"'
        assert remote_url_from_resolved(line, "other") == "https://codeload.github.com/acme/thing/tar.gz/abc"


class TestYarnLockParser:
    """Test yarn.lock parsing."""

    def test_remotes_and_dependencies(self):
        lock = _parse(YARN_LOCK)
        assert set(lock.remotes) == {"https://npm.acme.io", "https://registry.yarnpkg.com"}
        assert lock.remotes["https://npm.acme.io"].dependency_names() == ["@acme/ui", "left-pad"]
        assert lock.remotes["https://registry.yarnpkg.com"].dependency_names() == ["@babel/core", "lodash"]

    def test_nested_dependency_listing_is_not_a_header(self):
        """The "dependencies:" line inside a block does not start a new entry."""
        lock = _parse(YARN_LOCK)
        for remote in lock.remotes.values():
            assert not remote.has_dependency("  dependencies")
            assert not remote.has_dependency("dependencies")

    def test_resolved_outside_block_is_ignored(self):
        content = 'foo@1.0.0:\n  version "1.0.0"\n\n  resolved "https://registry.yarnpkg.com/foo/-/foo-1.0.0.tgz"\n'
        assert _parse(content).remotes == {}

    def test_blank_line_resets_current_dependency(self):
        content = (
            'foo@1.0.0:\n'
            '  version "1.0.0"\n'
            '\n'
            'bar@2.0.0:\n'
            '  resolved "https://registry.yarnpkg.com/bar/-/bar-2.0.0.tgz"\n'
        )
        lock = _parse(content)
        assert lock.remotes["https://registry.yarnpkg.com"].dependency_names() == ["bar"]

    def test_remote_registered_only_with_dependency(self):
        """Remotes are created lazily from resolved lines."""
        lock = _parse('foo@1.0.0:\n  version "1.0.0"\n')
        assert lock.remotes == {}

    def test_malformed_header_is_skipped(self):
        content = '":\n  resolved "https://registry.yarnpkg.com/x/-/x-1.0.0.tgz"\n'
        assert _parse(content).remotes == {}

    def test_parsing_is_idempotent(self):
        assert _parse(YARN_LOCK).remotes == _parse(YARN_LOCK).remotes

    def test_crlf_line_endings(self):
        assert _parse(YARN_LOCK.replace("\n", "\r\n")).remotes == _parse(YARN_LOCK).remotes
