"""Shared models used across the map test suite."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


class ScenarioStatus(str, enum.Enum):
    """Outcome of a single scenario run."""

    PASSED = "passed"
    FAILED = "failed"


class ScenarioResult(BaseModel):
    """Result recorded for one scenario."""

    name: str
    status: ScenarioStatus
    message: Optional[str] = Field(default=None, description="Failure reason, if any.")
    duration: float = Field(default=0.0, description="Wall-clock seconds spent in the scenario.")

    @property
    def passed(self) -> bool:
        return self.status == ScenarioStatus.PASSED


class NotificationLevel(str, enum.Enum):
    """Severity of notification events."""

    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"


class NotificationEvent(BaseModel):
    """Event emitted while scenarios run."""

    type: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
