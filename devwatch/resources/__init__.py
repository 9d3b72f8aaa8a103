"""devwatch Resources.

Declared deployable resources and the decision of how a change batch
affects them:
- Resource, LiveUpdate, SyncStep, RunStep: immutable declarations
- load_resources / build_resources: configuration to resources
- decide / ChangeDispatcher: NONE, FULL_REBUILD or LIVE_UPDATE per resource
"""

from .dispatcher import ChangeDispatcher, decide
from .loader import build_ignore_matcher, build_resource, build_resources, load_resources
from .model import ChangeDecision, FileEvent, LiveUpdate, Resource, RunStep, SyncStep

__all__ = [
    # Model
    "FileEvent",
    "SyncStep",
    "RunStep",
    "LiveUpdate",
    "Resource",
    "ChangeDecision",
    # Loading
    "build_ignore_matcher",
    "build_resource",
    "build_resources",
    "load_resources",
    # Dispatch
    "decide",
    "ChangeDispatcher",
]
