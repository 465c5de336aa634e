"""
Transfer batch execution.

Two failure policies:

    - sequential: jobs run in batch order and the batch stops at the first failure
    - concurrent: jobs run on a bounded thread pool, every job runs to completion
      and the batch succeeds only if all of them did
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Mapping

from ..models.jobs import TransferJob
from ..models.results import BatchResult
from ..utils.error_handling import handle_generic_error

JobFunc = Callable[[TransferJob], bool]

THREAD_NAME_PREFIX = "transfer"


def _run_job(job_func: JobFunc, path: str, job: TransferJob) -> bool:
    """Run one job; an exception escaping the job function counts as a failed job."""
    try:
        return bool(job_func(job))
    except Exception as e:  # pylint: disable=broad-except
        handle_generic_error(e, f"transfer of {path}")
        return False


def run_sequential(jobs: Mapping[str, TransferJob], job_func: JobFunc) -> BatchResult:
    """
    Run jobs one at a time in batch order, stopping at the first failure.

    Args:
        jobs: Jobs keyed by artifact path
        job_func: Callable performing one job and returning its success

    Returns:
        BatchResult; jobs after a failure are neither completed nor failed
    """
    result = BatchResult(total=len(jobs))
    for path, job in jobs.items():
        if not _run_job(job_func, path, job):
            result.failed += 1
            logging.error("Job for %s failed, %d remaining job(s) not attempted", path, result.skipped)
            break
        result.completed += 1
    return result


def run_concurrent(jobs: Mapping[str, TransferJob], job_func: JobFunc, workers: int) -> BatchResult:
    """
    Run jobs on up to ``workers`` threads; the batch succeeds only if every job does.

    A failed job does not cancel the others: in-flight and queued jobs still run.
    """
    result = BatchResult(total=len(jobs))
    logging.debug("Starting %d job(s) with %d workers", len(jobs), workers)

    with ThreadPoolExecutor(thread_name_prefix=THREAD_NAME_PREFIX, max_workers=workers) as executor:
        future_to_path = {executor.submit(_run_job, job_func, path, job): path for path, job in jobs.items()}

        for future in as_completed(future_to_path):
            if future.result():
                result.completed += 1
            else:
                result.failed += 1
                logging.error("Job for %s failed", future_to_path[future])

    return result


def run_batch(jobs: Mapping[str, TransferJob], job_func: JobFunc, workers: int = 1) -> BatchResult:
    """Run a batch concurrently when ``workers > 1``, sequentially otherwise."""
    if workers > 1:
        return run_concurrent(jobs, job_func, workers)
    return run_sequential(jobs, job_func)


__all__ = ["JobFunc", "run_sequential", "run_concurrent", "run_batch"]
