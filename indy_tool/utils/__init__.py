"""
Utility modules for Indy Tool operations.
"""

from .logger import setup_logging, WrappingFormatter
from .session import create_session_with_retry
from .checksum import calculate_md5, verify_md5
from .directories import ensure_directory, prepare_down_upload_directories, staging_path
from .error_handling import ChecksumMismatchError, ReplayError

from . import constants
from . import config_manager
from . import error_handling

__all__ = [
    "setup_logging",
    "WrappingFormatter",
    "create_session_with_retry",
    "calculate_md5",
    "verify_md5",
    "ensure_directory",
    "prepare_down_upload_directories",
    "staging_path",
    "ChecksumMismatchError",
    "ReplayError",
    "constants",
    "config_manager",
    "error_handling",
]
