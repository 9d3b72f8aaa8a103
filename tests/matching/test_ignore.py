"""Tests for ignore file matchers and rendering."""
import pytest

from devwatch.matching.base import EMPTY_MATCHER
from devwatch.matching.composite import build_composite
from devwatch.matching.errors import IgnoreFileError, InvalidPatternError, PatternExportError
from devwatch.matching.ignore import IgnoreFileMatcher, load_ignore_file, render_ignore_file
from devwatch.matching.matchers import ExactSetMatcher, GlobMatcher


class TestIgnoreFileMatcher:
    """Tests for IgnoreFileMatcher (.dockerignore semantics)."""

    def test_directory_pattern_matches_contents(self):
        matcher = IgnoreFileMatcher("/repo", ["node_modules/"])
        assert matcher.matches("/repo/node_modules")
        assert matcher.matches("/repo/node_modules/react/index.js")

    def test_patterns_anchored_at_context_root(self):
        matcher = IgnoreFileMatcher("/repo", ["*.log", "node_modules"])
        assert matcher.matches("/repo/debug.log")
        assert not matcher.matches("/repo/web/x.log")
        assert not matcher.matches("/repo/web/node_modules/x.js")

    def test_double_star_matches_any_depth(self):
        matcher = IgnoreFileMatcher("/repo", ["**/*.log"])
        assert matcher.matches("/repo/debug.log")
        assert matcher.matches("/repo/a/b/debug.log")
        assert not matcher.matches("/repo/debug.txt")

    def test_single_star_stays_in_segment(self):
        matcher = IgnoreFileMatcher("/repo", ["src/*.tmp"])
        assert matcher.matches("/repo/src/a.tmp")
        assert not matcher.matches("/repo/src/sub/a.tmp")

    @pytest.mark.parametrize("pattern", ["/build", "./build", "build/", "build//"])
    def test_leading_and_trailing_slashes_insignificant(self, pattern):
        matcher = IgnoreFileMatcher("/repo", [pattern])
        assert matcher.matches("/repo/build")
        assert matcher.matches("/repo/build/out.bin")
        assert not matcher.matches("/repo/src/build")

    def test_negation(self):
        matcher = IgnoreFileMatcher("/repo", ["*.log", "!keep.log"])
        assert matcher.matches("/repo/drop.log")
        assert not matcher.matches("/repo/keep.log")

    def test_bare_exclusion_rejected(self):
        with pytest.raises(InvalidPatternError) as exc_info:
            IgnoreFileMatcher("/repo", ["*.log", "!"])
        assert exc_info.value.pattern == "!"

    def test_outside_base_never_matches(self):
        matcher = IgnoreFileMatcher("/repo", ["*.log"])
        assert not matcher.matches("/elsewhere/debug.log")
        assert not matcher.matches("/repository/debug.log")

    def test_base_itself_never_matches(self):
        assert not IgnoreFileMatcher("/repo", ["*"]).matches("/repo")

    def test_is_dir_hint_does_not_change_answer(self):
        matcher = IgnoreFileMatcher("/repo", ["build"])
        assert matcher.matches("/repo/build", True) == matcher.matches("/repo/build", False)

    def test_comments_and_blanks_dropped(self):
        matcher = IgnoreFileMatcher("/repo", ["# comment", "", "   ", "*.tmp  ", "dist/"])
        assert matcher.as_patterns() == ["*.tmp", "dist/"]
        assert len(matcher) == 2

    def test_no_patterns(self):
        matcher = IgnoreFileMatcher("/repo", [])
        assert not matcher.matches("/repo/anything")
        assert matcher.as_patterns() == []
        assert matcher.pattern_capable


class TestLoadIgnoreFile:
    """Tests for load_ignore_file()."""

    def test_loads_patterns(self, repo_dir):
        matcher = load_ignore_file(repo_dir / "web" / ".dockerignore")

        assert matcher.base_dir == str(repo_dir / "web")
        assert matcher.source == str(repo_dir / "web" / ".dockerignore")
        assert matcher.as_patterns() == ["node_modules/", "*.log"]
        assert matcher.matches(str(repo_dir / "web" / "npm-debug.log"))
        assert not matcher.matches(str(repo_dir / "web" / "src" / "npm-debug.log"))
        assert not matcher.matches(str(repo_dir / "npm-debug.log"))

    def test_explicit_base_dir(self, repo_dir):
        matcher = load_ignore_file(repo_dir / "web" / ".dockerignore", base_dir=str(repo_dir))
        assert matcher.matches(str(repo_dir / "npm-debug.log"))
        assert not matcher.matches(str(repo_dir / "web" / "npm-debug.log"))

    def test_missing_file_is_empty(self, temp_dir):
        matcher = load_ignore_file(temp_dir / ".dockerignore")
        assert matcher.as_patterns() == []
        assert not matcher.matches(str(temp_dir / "x"))

    def test_unreadable_file_raises(self, temp_dir):
        directory = temp_dir / "is_a_dir"
        directory.mkdir()
        with pytest.raises(IgnoreFileError) as exc_info:
            load_ignore_file(directory)
        assert exc_info.value.path == str(directory)


class TestRenderIgnoreFile:
    """Tests for render_ignore_file()."""

    def test_renders_patterns_in_order(self):
        matcher = build_composite(
            [
                IgnoreFileMatcher("/repo", ["*.tmp"]),
                IgnoreFileMatcher("/repo", ["node_modules/", "*.log"]),
            ]
        )
        content = render_ignore_file(matcher, resource="web")

        assert content == (
            "# Generated by devwatch for resource 'web'. Do not edit.\n"
            "*.tmp\n"
            "node_modules/\n"
            "*.log\n"
        )

    def test_without_resource_name(self):
        content = render_ignore_file(IgnoreFileMatcher("/repo", ["*.tmp"]))
        assert content == "# Generated by devwatch. Do not edit.\n*.tmp\n"

    def test_empty_matcher_renders_header_only(self):
        content = render_ignore_file(EMPTY_MATCHER, resource="api")
        assert content == "# Generated by devwatch for resource 'api'. Do not edit.\n"

    def test_patterns_not_escaped(self):
        content = render_ignore_file(IgnoreFileMatcher("/repo", ["<weird>&name"]))
        assert "<weird>&name\n" in content

    def test_plain_matcher_rejected(self):
        matcher = build_composite(
            [IgnoreFileMatcher("/repo", ["*.tmp"]), ExactSetMatcher("/repo/secret")]
        )
        with pytest.raises(PatternExportError, match="resource 'api'"):
            render_ignore_file(matcher, resource="api")

    @pytest.mark.parametrize("pattern", ["*.{tmp,log}", "/repo/src/*.tmp"])
    def test_glob_matcher_not_exportable(self, pattern):
        with pytest.raises(PatternExportError):
            render_ignore_file(GlobMatcher(pattern))
        with pytest.raises(PatternExportError):
            render_ignore_file(build_composite([GlobMatcher(pattern), EMPTY_MATCHER]))

    @pytest.mark.parametrize(
        "path",
        [
            "/repo/debug.log",
            "/repo/web/debug.log",
            "/repo/node_modules/x/y.js",
            "/repo/web/node_modules/y.js",
            "/repo/build",
            "/repo/build/out.bin",
            "/repo/keep.log",
            "/repo/src/main.go",
        ],
    )
    def test_rendered_file_matches_like_the_matcher(self, path):
        matcher = build_composite(
            [
                IgnoreFileMatcher("/repo", ["*.log", "!keep.log", "node_modules/"]),
                IgnoreFileMatcher("/repo", ["/build/", "**/*.tmp"]),
            ]
        )
        reloaded = IgnoreFileMatcher("/repo", render_ignore_file(matcher).splitlines())

        assert reloaded.matches(path) == matcher.matches(path)
