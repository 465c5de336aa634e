"""
Indy Tool - replay and migrate tracked build artifacts between Indy instances.

This package reads a folo tracked-content report recorded during an original
build, remaps every recorded download and upload onto a target Indy, and
transfers the bytes with checksum verification, either as a replay of the build
or as a permanent migration to another Indy instance.
"""

from ._version import __version__

__author__ = "Indy Tests Team"

# Import main classes and functions for easy access
from .api import IndyClient
from .models import ReplayConfig, ReplayContext, TrackedContent, TrackedContentEntry, TransferJob
from .services import ReplayService
from .utils import create_session_with_retry, setup_logging, WrappingFormatter
from .cli import main as cli_main, cli as cli_group

__all__ = [
    "__version__",
    "IndyClient",
    "ReplayConfig",
    "ReplayContext",
    "TrackedContent",
    "TrackedContentEntry",
    "TransferJob",
    "ReplayService",
    "setup_logging",
    "WrappingFormatter",
    "create_session_with_retry",
    "cli_main",
    "cli_group",
]
