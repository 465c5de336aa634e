"""
Service layer for Indy replay operations.

This package provides the high-level coordination of replay and migration runs.
"""

from .replay_service import ReplayService, load_folo_record

__all__ = [
    "ReplayService",
    "load_folo_record",
]
