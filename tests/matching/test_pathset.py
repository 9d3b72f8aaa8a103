"""Tests for PathSet."""
import dataclasses

import pytest

from devwatch.matching.base import PathMatcher
from devwatch.matching.errors import MatchError
from devwatch.matching.matchers import SetOrDescendantMatcher
from devwatch.matching.pathset import PathSet


class FailingOnMatcher(PathMatcher):
    """Matcher that fails on one path and records every query."""

    def __init__(self, failing_path):
        self.failing_path = failing_path
        self.calls = []

    def matches(self, path, is_dir=False):
        self.calls.append(path)
        if path == self.failing_path:
            raise MatchError(path, "permission denied")
        return path == "/r/a"


class TestPathSet:
    """Tests for PathSet construction and emptiness."""

    def test_empty(self):
        assert PathSet().is_empty()
        assert PathSet.of([], "/r").is_empty()
        assert not PathSet.of(["a"], "/r").is_empty()

    def test_paths_stored_as_tuple(self):
        ps = PathSet(paths=["a", "b"], base_directory="/r")
        assert ps.paths == ("a", "b")

    def test_immutable(self):
        ps = PathSet.of(["a"], "/r")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ps.paths = ("b",)

    def test_matcher_resolves_against_base(self):
        ps = PathSet.of(["a", "b/"], "/r")
        assert isinstance(ps.matcher, SetOrDescendantMatcher)
        assert ps.matcher.paths == frozenset({"/r/a", "/r/b"})

    def test_matcher_cached(self):
        ps = PathSet.of(["a"], "/r")
        assert ps.matcher is ps.matcher

    def test_equality_ignores_cache(self):
        left = PathSet.of(["a"], "/r")
        right = PathSet.of(["a"], "/r")
        left.matcher
        assert left == right


class TestAnyMatch:
    """Tests for PathSet.any_match()."""

    def test_first_candidate_in_input_order(self):
        ps = PathSet.of(["a", "b"], "/r")
        assert ps.any_match(["/r/c", "/r/b/x"]) == (True, "/r/b/x")

    def test_reports_candidate_not_member(self):
        ps = PathSet.of(["b", "a"], "/r")
        assert ps.any_match(["/r/a/1", "/r/b/2"]) == (True, "/r/a/1")

    def test_no_match(self):
        ps = PathSet.of(["a"], "/r")
        assert ps.any_match(["/r/ab", "/x/a"]) == (False, "")

    def test_no_candidates(self):
        assert PathSet.of(["a"], "/r").any_match([]) == (False, "")

    def test_empty_set_never_matches(self):
        assert PathSet.of([], "/r").any_match(["/r", "/r/a"]) == (False, "")

    def test_accepts_iterator(self):
        ps = PathSet.of(["a"], "/r")
        assert ps.any_match(iter(["/r/a"])) == (True, "/r/a")

    def test_absolute_members(self):
        ps = PathSet.of(["/abs/dir"], "/r")
        assert ps.any_match(["/abs/dir/f"]) == (True, "/abs/dir/f")

    def test_repeatable(self):
        ps = PathSet.of(["a"], "/r")
        candidates = ["/r/x", "/r/a/y"]
        assert ps.any_match(candidates) == ps.any_match(candidates)

    def test_error_aborts_scan(self):
        ps = PathSet.of(["a"], "/r")
        failing = FailingOnMatcher("/r/broken")
        ps.__dict__["matcher"] = failing

        with pytest.raises(MatchError, match="permission denied"):
            ps.any_match(["/r/x", "/r/broken", "/r/a"])

        assert failing.calls == ["/r/x", "/r/broken"]

    def test_match_before_error_wins(self):
        ps = PathSet.of(["a"], "/r")
        ps.__dict__["matcher"] = FailingOnMatcher("/r/broken")

        assert ps.any_match(["/r/a", "/r/broken"]) == (True, "/r/a")
