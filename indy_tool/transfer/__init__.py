"""
Transfer operations for replaying and migrating tracked artifacts.

Modules:
    - executor: Sequential fail-fast and bounded concurrent batch execution
    - jobs: Download, upload and migration jobs with checksum verification
    - migrate: Delete-then-recopy migration protocol
    - reporting: Phase banners and summaries
"""

from .executor import run_batch, run_concurrent, run_sequential
from .jobs import JobRunner
from .migrate import MigrationOrchestrator
from .reporting import log_phase_result, log_phase_start, log_seal_result

__all__ = [
    "run_batch",
    "run_concurrent",
    "run_sequential",
    "JobRunner",
    "MigrationOrchestrator",
    "log_phase_result",
    "log_phase_start",
    "log_seal_result",
]
