"""Retry configuration model."""

from pydantic import BaseModel, ConfigDict, Field


class RetryConfig(BaseModel):
    """Configuration for retry logic.

    Attributes:
        max_attempts: Maximum number of attempts per target (1 = no retries)
        retry_interval_ms: Fixed delay between attempts in milliseconds
        timeout_ms: Timeout of a single attempt in milliseconds
    """

    max_attempts: int = Field(3, gt=0)
    retry_interval_ms: int = Field(10000, ge=0)  # Allow 0 for tests
    timeout_ms: int = Field(10000, gt=0)

    model_config = ConfigDict(extra="forbid")

    @property
    def retry_interval_seconds(self) -> float:
        return self.retry_interval_ms / 1000
