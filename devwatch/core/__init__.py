"""devwatch Core - Shared constants and path utilities.

Import specific functions from submodules:
    from devwatch.core import constants
    from devwatch.core import ospath
    from devwatch.core import validators
"""

from devwatch.core import constants, ospath

__all__ = [
    "constants",
    "ospath",
]
