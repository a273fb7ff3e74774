"""Configuration models with Pydantic validation."""

from keepwarm.domain.config.app import AppConfig
from keepwarm.domain.config.retry import RetryConfig
from keepwarm.domain.config.schedule import ScheduleConfig
from keepwarm.domain.config.targets import TargetsConfig

__all__ = [
    "AppConfig",
    "TargetsConfig",
    "RetryConfig",
    "ScheduleConfig",
]
