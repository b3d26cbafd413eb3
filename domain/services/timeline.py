"""Bake-day timeline planned backwards from a finish time."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Iterable, Optional

from config.constants import DEFAULT_TIMELINE_STEPS
from domain.exceptions import InvalidInputError
from domain.services.number_parser import require_non_negative


@dataclass(frozen=True)
class TimelineStep:
    name: str
    duration_hours: Decimal

    def __post_init__(self) -> None:
        if not (self.name or "").strip():
            raise InvalidInputError("Step name cannot be empty", field="name")
        object.__setattr__(
            self,
            "duration_hours",
            require_non_negative(self.duration_hours, f"{self.name} duration"),
        )


@dataclass(frozen=True)
class ScheduledStep:
    name: str
    duration_hours: Decimal
    starts_at: datetime
    ends_at: datetime


@dataclass(frozen=True)
class Timeline:
    steps: tuple[ScheduledStep, ...]
    total_hours: Decimal

    @property
    def starts_at(self) -> Optional[datetime]:
        return self.steps[0].starts_at if self.steps else None


def default_steps() -> list[TimelineStep]:
    return [TimelineStep(name=name, duration_hours=hours) for name, hours in DEFAULT_TIMELINE_STEPS]


def plan_timeline(steps: Iterable[TimelineStep | tuple[str, Any]], finish_at: datetime) -> Timeline:
    """Schedule steps so the last one ends at ``finish_at``."""
    parsed = [
        s if isinstance(s, TimelineStep) else TimelineStep(name=s[0], duration_hours=s[1])
        for s in steps
    ]

    scheduled: list[ScheduledStep] = []
    cursor = finish_at
    for step in reversed(parsed):
        starts_at = cursor - timedelta(hours=float(step.duration_hours))
        scheduled.append(
            ScheduledStep(
                name=step.name,
                duration_hours=step.duration_hours,
                starts_at=starts_at,
                ends_at=cursor,
            )
        )
        cursor = starts_at

    scheduled.reverse()
    total = sum((s.duration_hours for s in parsed), Decimal("0"))
    return Timeline(steps=tuple(scheduled), total_hours=total)
