"""devwatch - path matching for development-loop orchestrators.

Decides which declared resources a batch of filesystem changes affects and
whether each needs a full rebuild or an in-place live update.
"""

from devwatch.core.constants import DEVWATCH_VERSION

__version__ = DEVWATCH_VERSION
