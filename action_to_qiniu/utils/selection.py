"""
File selection for the distribution stage.

Resolves a root directory and an ordered list of glob-style inclusion
patterns into a concrete, deduplicated list of regular files.
"""

import glob
import logging
import os
from typing import Dict, List, Optional, Sequence

from .constants import DEFAULT_PATTERNS


def _matches_for_pattern(root: str, pattern: str) -> List[str]:
    """
    Expand one pattern relative to the root.

    Args:
        root: Absolute selection root
        pattern: Glob pattern, ``**`` matches any number of directories

    Returns:
        Absolute paths matched by the pattern, files and directories alike
    """
    # Absolute patterns are anchored at the root as well
    relative_pattern = pattern.lstrip("/") if os.path.isabs(pattern) else pattern
    matches = glob.glob(relative_pattern, root_dir=root, recursive=True)
    return [os.path.normpath(os.path.join(root, match)) for match in matches]


def select_files(root: str, patterns: Optional[Sequence[str]] = None) -> List[str]:
    """
    Select regular files under root matching any of the patterns.

    Patterns matching nothing contribute nothing. Directories and other
    non-regular entries are excluded. Symlinks to regular files are
    selected, and a file reachable through several paths (a symlink and its
    target, or overlapping patterns) is returned once under the first path
    seen.

    Args:
        root: Directory to select from
        patterns: Ordered inclusion patterns (default: everything, recursively)

    Returns:
        Sorted list of absolute file paths, possibly empty

    Example:
        >>> select_files("/tmp/site", ["**/*.html", "assets/**/*"])
        ['/tmp/site/assets/app.js', '/tmp/site/index.html']
    """
    absolute_root = os.path.abspath(root)
    active_patterns = list(patterns) if patterns else list(DEFAULT_PATTERNS)

    selected: Dict[str, str] = {}
    for pattern in active_patterns:
        matches = _matches_for_pattern(absolute_root, pattern)
        if not matches:
            logging.debug("Pattern %r matched no files in %s", pattern, absolute_root)
        for path in sorted(matches):
            if not os.path.isfile(path):
                continue
            real_path = os.path.realpath(path)
            if real_path in selected:
                continue
            selected[real_path] = path

    files = sorted(selected.values())
    logging.debug("Selected %d file(s) from %s using %d pattern(s)", len(files), absolute_root, len(active_patterns))
    return files


def relative_posix_path(path: str, root: str) -> str:
    """
    Path of a selected file relative to the root, with forward slashes.

    Args:
        path: Absolute file path
        root: Selection root

    Returns:
        Relative path using ``/`` as the separator
    """
    relative = os.path.relpath(path, os.path.abspath(root))
    return relative.replace(os.sep, "/")


__all__ = ["select_files", "relative_posix_path"]
