"""Result models for transfer batches."""

from pydantic import Field

from .base import IndyBaseModel


class BatchResult(IndyBaseModel):
    """
    Outcome of one transfer batch.

    Attributes:
        total: Number of jobs in the batch
        completed: Jobs that succeeded (dry-run jobs count as succeeded)
        failed: Jobs that failed
    """

    total: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)

    @property
    def skipped(self) -> int:
        """Jobs never attempted because a sequential batch stopped early."""
        return max(self.total - self.completed - self.failed, 0)

    @property
    def succeeded(self) -> bool:
        """True only when every job of the batch succeeded."""
        return self.failed == 0 and self.completed == self.total

    def __bool__(self) -> bool:
        return self.succeeded


__all__ = ["BatchResult"]
