"""
devwatch Core: Path Utilities

Resolution and containment helpers shared by the matchers. Every helper here is
a pure string operation except abs_path(), which may consult the process cwd.
"""
import os
from typing import Optional


def abs_path(path: str) -> str:
    """Resolve a path against the process working directory.

    Args:
        path: Absolute or relative path

    Returns:
        Normalized absolute path

    Raises:
        OSError: If the working directory cannot be determined
    """
    return os.path.abspath(path)


def join_base(base_dir: str, path: str) -> str:
    """Resolve a path against a base directory.

    Absolute paths are returned untouched.

    Args:
        base_dir: Directory that relative paths are relative to
        path: Absolute or relative path

    Returns:
        Absolute path
    """
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(base_dir, path))


def _strip_trailing_sep(path: str) -> str:
    stripped = path.rstrip(os.sep)
    if os.altsep:
        stripped = stripped.rstrip(os.altsep)
    # Root stays root
    return stripped or path[:1]


def is_child(parent: str, child: str) -> bool:
    """Check whether child lies within the subtree rooted at parent.

    Containment is decided on path-segment boundaries, so "/a/bc" is not a
    child of "/a/b". Trailing separators on either side are ignored and a path
    counts as its own child.

    Args:
        parent: Absolute directory path
        child: Absolute candidate path

    Returns:
        True if child equals parent or is nested below it
    """
    parent = _strip_trailing_sep(parent)
    child = _strip_trailing_sep(child)

    if child == parent:
        return True

    prefix = parent if parent.endswith(os.sep) else parent + os.sep
    return child.startswith(prefix)


def try_as_child(parent: str, child: str) -> Optional[str]:
    """Express child relative to parent.

    Args:
        parent: Absolute directory path
        child: Absolute candidate path

    Returns:
        Relative path ("." for parent itself), or None if child is outside parent
    """
    if not is_child(parent, child):
        return None

    parent = _strip_trailing_sep(parent)
    child = _strip_trailing_sep(child)
    if child == parent:
        return "."

    prefix = parent if parent.endswith(os.sep) else parent + os.sep
    return child[len(prefix):]
