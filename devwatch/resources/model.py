#!/usr/bin/env python3
"""Resource declarations after configuration load.

A resource watches a set of paths (deps), ignores some of them, and may
declare a live update: file syncs into the running container plus commands
to run when certain files change. Everything here is immutable and holds
matchers that were built once at load time.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from devwatch.core import ospath
from devwatch.core.constants import ChangeAction
from devwatch.matching.base import EMPTY_MATCHER, PathMatcher
from devwatch.matching.pathset import PathSet


@dataclass(frozen=True)
class FileEvent:
    """A changed path reported by the filesystem watcher."""

    path: str
    is_dir: bool = False


def as_events(changes: Iterable[Union[str, FileEvent]]) -> List[FileEvent]:
    """Accept plain paths wherever events are expected."""
    return [c if isinstance(c, FileEvent) else FileEvent(c) for c in changes]


@dataclass(frozen=True)
class SyncStep:
    """Copy files under local (absolute) to remote inside the container."""

    local: str
    remote: str

    def covers(self, path: str) -> bool:
        return ospath.is_child(self.local, path)

    def container_path(self, path: str) -> Optional[str]:
        """Map a local path to its location in the container."""
        relative = ospath.try_as_child(self.local, path)
        if relative is None:
            return None
        if relative == ".":
            return self.remote
        return self.remote.rstrip("/") + "/" + relative.replace("\\", "/")


@dataclass(frozen=True)
class RunStep:
    """Command to run in the container after syncing.

    A step without triggers runs on every live update.
    """

    command: str
    triggers: PathSet = field(default_factory=PathSet)

    def should_run(self, paths: Iterable[str]) -> bool:
        if self.triggers.is_empty():
            return True
        matched, _ = self.triggers.any_match(paths)
        return matched


@dataclass(frozen=True)
class LiveUpdate:
    """In-place update rules for a resource."""

    fall_back_on: PathSet = field(default_factory=PathSet)
    syncs: Tuple[SyncStep, ...] = ()
    runs: Tuple[RunStep, ...] = ()

    def sync_for(self, path: str) -> Optional[SyncStep]:
        """First sync step (in declaration order) covering path."""
        for sync in self.syncs:
            if sync.covers(path):
                return sync
        return None


@dataclass(frozen=True)
class Resource:
    """A deployable resource and the paths that affect it."""

    name: str
    base_dir: str
    deps: PathSet
    ignore: PathMatcher = EMPTY_MATCHER
    live_update: Optional[LiveUpdate] = None

    def watched_changes(self, changes: Iterable[Union[str, FileEvent]]) -> List[str]:
        """Filter changes down to those this resource cares about.

        Args:
            changes: Changed paths or events, in priority order

        Returns:
            Paths matching deps and not ignored, in input order without duplicates
        """
        deps = self.deps.matcher
        watched = []
        seen = set()
        for event in as_events(changes):
            if event.path in seen:
                continue
            if deps.matches(event.path, event.is_dir) and not self.ignore.matches(
                event.path, event.is_dir
            ):
                watched.append(event.path)
                seen.add(event.path)
        return watched


@dataclass(frozen=True)
class ChangeDecision:
    """What to do with a resource after a change batch."""

    resource: str
    action: ChangeAction
    paths: Tuple[str, ...] = ()
    matched_path: Optional[str] = None
    reason: str = ""
    syncs: Tuple[SyncStep, ...] = ()
    runs: Tuple[RunStep, ...] = ()

    @property
    def triggered(self) -> bool:
        return self.action is not ChangeAction.NONE
