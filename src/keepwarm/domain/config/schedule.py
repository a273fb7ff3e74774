"""Schedule configuration model."""

from pydantic import BaseModel, ConfigDict, Field


class ScheduleConfig(BaseModel):
    """Configuration for the built-in scheduler loop.

    Attributes:
        interval_seconds: Pause between the end of one batch and the start of the next
    """

    interval_seconds: int = Field(600, gt=0)

    model_config = ConfigDict(extra="forbid")
