"""
Utility modules for action-to-qiniu.

``config_manager`` depends on the models package and is imported from its
module path rather than re-exported here.
"""

from .logger import setup_logging, WrappingFormatter, get_logger, progress_level
from .session import create_session_with_retry
from .selection import select_files, relative_posix_path
from .path_mapping import PathMapper, apply_path_mapping, map_destination_key, normalize_key

from . import constants
from . import error_handling

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "get_logger",
    "progress_level",
    "create_session_with_retry",
    "select_files",
    "relative_posix_path",
    "PathMapper",
    "apply_path_mapping",
    "map_destination_key",
    "normalize_key",
    "constants",
    "error_handling",
]
