"""Targets configuration model."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TargetsConfig(BaseModel):
    """Configuration for the URLs pinged on every batch.

    Attributes:
        urls: Target URLs, pinged in this order
    """

    urls: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
