"""
Pydantic models for indy-tool.

This package contains all Pydantic models used in the application:
- folo: Tracked-content records read from Indy
- jobs: Transfer and migration jobs derived from a record
- context: Run configuration and invocation inputs
- results: Transfer batch outcomes
"""

from .base import IndyBaseModel, IndyRecordModel
from .folo import AccessChannel, StoreKey, TrackedContent, TrackedContentEntry, TrackingKey
from .jobs import JobMap, MigrationJob, TransferJob, add_job
from .context import BuildMeta, ReplayConfig, ReplayContext, decide_meta
from .results import BatchResult

__all__ = [
    "IndyBaseModel",
    "IndyRecordModel",
    "AccessChannel",
    "StoreKey",
    "TrackedContent",
    "TrackedContentEntry",
    "TrackingKey",
    "JobMap",
    "MigrationJob",
    "TransferJob",
    "add_job",
    "BuildMeta",
    "ReplayConfig",
    "ReplayContext",
    "decide_meta",
    "BatchResult",
]
