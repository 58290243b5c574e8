"""Pydantic models describing reminder job runs."""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class ReminderRunResults(CamelModel):
    total: int
    sent: int
    failed: int
    cleaned_up: int
    errors: list[str] = Field(default_factory=list)


class ReminderRunResponse(CamelModel):
    success: bool
    message: str
    results: ReminderRunResults
    timestamp: datetime


__all__ = ["ReminderRunResponse", "ReminderRunResults"]
