"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from keepwarm.domain.config.retry import RetryConfig
from keepwarm.domain.config.schedule import ScheduleConfig
from keepwarm.domain.config.targets import TargetsConfig


class AppConfig(BaseModel):
    """Main application configuration.

    This is the root configuration model that aggregates all configuration sections.
    Validation is performed at load time to fail fast on configuration errors.

    Attributes:
        targets: URLs to ping
        retry: Retry logic configuration
        schedule: Scheduler loop configuration
    """

    targets: TargetsConfig = Field(default_factory=TargetsConfig)
    retry: RetryConfig = Field(default_factory=RetryConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "targets": {
                    "urls": [
                        "https://api.example.com/health",
                        "https://worker.example.com/ping",
                    ],
                },
                "retry": {
                    "max_attempts": 3,
                    "retry_interval_ms": 10000,
                    "timeout_ms": 10000,
                },
                "schedule": {
                    "interval_seconds": 600,
                },
            }
        },
    )
