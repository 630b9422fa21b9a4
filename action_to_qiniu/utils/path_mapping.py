"""
Destination key mapping.

Rewrites the relative path of a selected file into the key it is stored
under. Mapping is pure: the same inputs always give the same key, which
keeps CDN addresses stable across runs.
"""

import posixpath
import re
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

MappingRules = Union[Mapping[str, str], Sequence[Tuple[str, str]]]

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def _rule_items(rules: Optional[MappingRules]) -> Iterable[Tuple[str, str]]:
    if not rules:
        return ()
    if isinstance(rules, Mapping):
        return rules.items()
    return rules


def apply_path_mapping(relative_path: str, rules: Optional[MappingRules]) -> str:
    """
    Apply the first matching prefix rule to a relative path.

    Rules are tried in declaration order; the first rule whose prefix is a
    literal prefix of the path replaces that prefix and no other rule is
    applied. Without a matching rule the path is returned unchanged.

    Args:
        relative_path: Path relative to the selection root, forward slashes
        rules: Ordered prefix -> replacement rules

    Returns:
        Rewritten relative path

    Example:
        >>> apply_path_mapping("b/c.txt", {"b/": "assets/"})
        'assets/c.txt'
    """
    for prefix, replacement in _rule_items(rules):
        if relative_path.startswith(prefix):
            return replacement + relative_path[len(prefix) :]
    return relative_path


def normalize_key(path: str) -> str:
    """
    Normalize a destination path into a storage key.

    Backslashes become forward slashes, repeated slashes collapse and any
    leading slash is stripped, so keys are always relative.

    Args:
        path: Destination path

    Returns:
        Normalized key
    """
    key = _DUPLICATE_SLASHES.sub("/", path.replace("\\", "/"))
    return key.lstrip("/")


def map_destination_key(relative_path: str, rules: Optional[MappingRules], base_path: str = "/") -> str:
    """
    Compute the destination key for a selected file.

    Args:
        relative_path: Path relative to the selection root
        rules: Ordered prefix -> replacement rules
        base_path: Base path the key is joined under

    Returns:
        Destination key (forward slashes, no leading slash)

    Example:
        >>> map_destination_key("b/c.txt", {"b/": "assets/"}, "/static")
        'static/assets/c.txt'
        >>> map_destination_key("a.txt", {}, "/")
        'a.txt'
    """
    mapped = apply_path_mapping(relative_path.replace("\\", "/"), rules)
    base = (base_path or "/").replace("\\", "/")
    # A replacement starting with "/" is still joined under the base path
    joined = posixpath.normpath(posixpath.join(base, mapped.lstrip("/")))
    key = normalize_key(joined)
    return "" if key == "." else key


class PathMapper:
    """Path mapper bound to one set of rules and one base path."""

    def __init__(self, rules: Optional[MappingRules] = None, base_path: str = "/") -> None:
        """
        Initialize the mapper.

        Args:
            rules: Ordered prefix -> replacement rules
            base_path: Base path keys are joined under
        """
        self.rules: Tuple[Tuple[str, str], ...] = tuple(_rule_items(rules))
        self.base_path = base_path

    def map(self, relative_path: str) -> str:
        """Return the destination key for a relative path."""
        return map_destination_key(relative_path, self.rules, self.base_path)

    def __repr__(self) -> str:
        return f"PathMapper(rules={list(self.rules)!r}, base_path={self.base_path!r})"


__all__ = [
    "MappingRules",
    "apply_path_mapping",
    "normalize_key",
    "map_destination_key",
    "PathMapper",
]
