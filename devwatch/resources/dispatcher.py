#!/usr/bin/env python3
"""Change dispatch: which resources a change batch affects, and how.

For each resource the decision is, in order:

1. nothing watched changed: NONE
2. no live update declared: FULL_REBUILD
3. a change falls under live_update.fall_back_on: FULL_REBUILD
4. a change is not under any sync step: FULL_REBUILD
5. otherwise: LIVE_UPDATE with the touched sync steps and triggered run steps

Example:
    >>> dispatcher = ChangeDispatcher(resources)
    >>> for decision in dispatcher.dispatch([FileEvent("/repo/src/main.go")]):
    ...     print(decision.resource, decision.action.value)
    api full_rebuild
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Union

from devwatch.core.constants import ChangeAction
from devwatch.infrastructure.logger import Logger, get_logger
from devwatch.resources.model import ChangeDecision, FileEvent, Resource, as_events


def decide(resource: Resource, changes: Iterable[Union[str, FileEvent]]) -> ChangeDecision:
    """Decide how a resource reacts to a batch of changes.

    Args:
        resource: Resource to evaluate
        changes: Changed paths or events in priority order

    Returns:
        Decision for the resource
    """
    paths = resource.watched_changes(changes)
    if not paths:
        return ChangeDecision(resource=resource.name, action=ChangeAction.NONE)

    watched = tuple(paths)
    live_update = resource.live_update
    if live_update is None:
        return ChangeDecision(
            resource=resource.name,
            action=ChangeAction.FULL_REBUILD,
            paths=watched,
            matched_path=watched[0],
            reason=f"{watched[0]} changed",
        )

    fall_back, matched = live_update.fall_back_on.any_match(watched)
    if fall_back:
        return ChangeDecision(
            resource=resource.name,
            action=ChangeAction.FULL_REBUILD,
            paths=watched,
            matched_path=matched,
            reason=f"{matched} matches fall_back_on",
        )

    syncs = []
    for path in watched:
        sync = live_update.sync_for(path)
        if sync is None:
            return ChangeDecision(
                resource=resource.name,
                action=ChangeAction.FULL_REBUILD,
                paths=watched,
                matched_path=path,
                reason=f"{path} is not covered by any sync step",
            )
        if sync not in syncs:
            syncs.append(sync)

    # Keep declaration order for syncs
    ordered_syncs = tuple(s for s in live_update.syncs if s in syncs)
    runs = tuple(run for run in live_update.runs if run.should_run(watched))

    return ChangeDecision(
        resource=resource.name,
        action=ChangeAction.LIVE_UPDATE,
        paths=watched,
        matched_path=watched[0],
        reason=f"{len(watched)} file(s) synced by {len(ordered_syncs)} step(s)",
        syncs=ordered_syncs,
        runs=runs,
    )


class ChangeDispatcher:
    """Evaluates change batches against every declared resource.

    Resources and their matchers are immutable, so with max_workers > 1 they
    are evaluated on a thread pool without further locking.
    """

    def __init__(
        self,
        resources: Sequence[Resource],
        max_workers: int = 1,
        logger: Optional[Logger] = None,
    ):
        """Initialize dispatcher.

        Args:
            resources: Resources in declaration order
            max_workers: Threads used to evaluate resources
            logger: Logger (default: global logger)
        """
        self._resources = tuple(resources)
        self._max_workers = max(1, max_workers)
        self._logger = logger or get_logger()

    @property
    def resources(self) -> Sequence[Resource]:
        return self._resources

    def evaluate(self, changes: Iterable[Union[str, FileEvent]]) -> List[ChangeDecision]:
        """Decide for every resource, including those left untouched.

        Returns:
            One decision per resource, in declaration order
        """
        events = as_events(changes)

        if self._max_workers == 1 or len(self._resources) < 2:
            return [decide(resource, events) for resource in self._resources]

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(executor.map(lambda r: decide(r, events), self._resources))

    def dispatch(self, changes: Iterable[Union[str, FileEvent]]) -> List[ChangeDecision]:
        """Decide which resources a change batch triggers.

        Args:
            changes: Changed paths or events in priority order

        Returns:
            Decisions for triggered resources, in declaration order
        """
        events = as_events(changes)
        with self._logger.add_context(changes=len(events)):
            self._logger.debug("Dispatching change batch")

            triggered = []
            for decision in self.evaluate(events):
                if not decision.triggered:
                    continue
                self._logger.info(
                    "Resource triggered",
                    resource=decision.resource,
                    action=decision.action.value,
                    path=decision.matched_path,
                )
                triggered.append(decision)

            if not triggered:
                self._logger.debug("No resource affected")

        return triggered
