"""Operation polling configuration schemas."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PollPeriodConfig(BaseModel):
    """Interval between polls, growing from the initial period up to the maximum."""

    initial_period: float = Field(5.0, description="First interval between polls in seconds")
    max_period: Optional[float] = Field(
        15.0, description="Upper bound of the interval, defaults to ten times the initial period"
    )

    @field_validator("initial_period")
    @classmethod
    def validate_initial_period(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Initial poll period must be positive")
        return v

    @model_validator(mode="after")
    def validate_periods(self) -> "PollPeriodConfig":
        """Validate that the maximum period is not below the initial one."""
        if self.max_period is not None and self.max_period < self.initial_period:
            raise ValueError("Maximum poll period cannot be lower than the initial period")
        return self


class TimeoutsConfig(BaseModel):
    """Timeouts in seconds for the conditions the poller waits on."""

    node_running: float = Field(1200, description="Wait for an instance to reach running")
    node_terminated: float = Field(30, description="Wait for an instance to disappear")
    node_suspended: float = Field(120, description="Wait for an instance to stop")
    image_available: float = Field(1200, description="Wait for a captured image to become available")
    operation_timeout: float = Field(1200, description="Wait for a generic provider operation")

    @field_validator("node_running", "node_terminated", "node_suspended",
                     "image_available", "operation_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout."""
        if v < 0:
            raise ValueError("Timeouts must be non-negative")
        return v


class PollingConfig(BaseModel):
    """Operation polling configuration."""

    period: PollPeriodConfig = Field(default_factory=PollPeriodConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
