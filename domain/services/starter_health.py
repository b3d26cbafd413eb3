"""Starter health classification and feeding schedule.

Every function takes ``now`` explicitly and returns new values; nothing
here reads the clock or mutates a starter.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional

from config.constants import (
    ACTIVITY_STATUS_THRESHOLDS,
    DEFAULT_FEEDING_FREQUENCY_HOURS,
    OVERDUE_POOR_AFTER_HOURS,
)
from domain.exceptions import InvalidInputError
from domain.models import (
    FeedingLog,
    FeedingRatio,
    HealthStatus,
    RecordId,
    Starter,
    StarterType,
)
from domain.services.number_parser import require_range

SECONDS_PER_HOUR = Decimal("3600")


@dataclass(frozen=True)
class FeedingReminder:
    """Content for a feeding notification; the caller schedules it."""

    starter_id: Optional[RecordId]
    fires_at: datetime
    title: str
    body: str


def next_feeding_due(last_fed_at: datetime, frequency_hours: int) -> datetime:
    if isinstance(frequency_hours, bool) or not isinstance(frequency_hours, int) or frequency_hours <= 0:
        raise InvalidInputError(
            f"Feeding frequency must be a positive number of hours: {frequency_hours}",
            field="frequency_hours",
        )
    return last_fed_at + timedelta(hours=frequency_hours)


def is_overdue(now: datetime, next_feeding_due_at: Optional[datetime]) -> bool:
    if next_feeding_due_at is None:
        return False
    return now > next_feeding_due_at


def classify(
    is_active: bool,
    now: datetime,
    next_feeding_due_at: Optional[datetime],
    avg_activity_level: Optional[Any] = None,
) -> HealthStatus:
    """Classify starter health.

    Order matters: inactive wins, then overdue checks, then activity.
    """
    if not is_active:
        return HealthStatus.INACTIVE

    if next_feeding_due_at is not None:
        if now - next_feeding_due_at > timedelta(hours=OVERDUE_POOR_AFTER_HOURS):
            return HealthStatus.POOR
        if is_overdue(now, next_feeding_due_at):
            return HealthStatus.FAIR

    if avg_activity_level is not None:
        activity = require_range(avg_activity_level, 1, 5, "Average activity level")
        for minimum, status in ACTIVITY_STATUS_THRESHOLDS:
            if activity >= minimum:
                return HealthStatus(status)
        return HealthStatus.POOR

    return HealthStatus.GOOD


def health_description(status: HealthStatus) -> str:
    return status.description


def hours_until_feeding(now: datetime, next_feeding_due_at: datetime) -> Decimal:
    """Signed hours until the feeding is due; negative when overdue."""
    seconds = Decimal(str((next_feeding_due_at - now).total_seconds()))
    return seconds / SECONDS_PER_HOUR


def human_feeding_text(now: datetime, next_feeding_due_at: Optional[datetime]) -> str:
    """Render the time to the next feeding, e.g. "Due in 3 hours"."""
    if next_feeding_due_at is None:
        return "Not scheduled"

    hours = hours_until_feeding(now, next_feeding_due_at)
    prefix = "Overdue by" if hours < 0 else "Due in"
    span = abs(hours)

    # A value that rounds up to the next unit is shown in that unit.
    minutes = _round_half_up(span * 60)
    if minutes < 60:
        return f"{prefix} {_plural(minutes, 'minute')}"
    whole_hours = _round_half_up(span)
    if whole_hours < 24:
        return f"{prefix} {_plural(whole_hours, 'hour')}"
    return f"{prefix} {_plural(max(1, int(span // 24)), 'day')}"


def average_activity_level(logs: Iterable[FeedingLog]) -> Optional[Decimal]:
    levels = [Decimal(log.activity_level) for log in logs if log.activity_level is not None]
    if not levels:
        return None
    return sum(levels, Decimal("0")) / len(levels)


def average_rise_time(logs: Iterable[FeedingLog]) -> Optional[Decimal]:
    peaks = [log.peak_time_hours for log in logs if log.peak_time_hours is not None]
    if not peaks:
        return None
    return sum(peaks, Decimal("0")) / len(peaks)


class StarterScheduler:
    """Pure transitions of a starter's feeding schedule and health."""

    def create_starter(
        self,
        name: str,
        flour_type: str,
        feeding_ratio: FeedingRatio | str,
        now: datetime,
        feeding_frequency_hours: int = DEFAULT_FEEDING_FREQUENCY_HOURS,
        starter_type: StarterType = StarterType.SOURDOUGH,
        notes: str = "",
        fed_now: bool = True,
    ) -> Starter:
        """Create an active starter in good health.

        When ``fed_now`` is set the starter counts as fed at ``now`` and its
        next feeding is scheduled from there.
        """
        last_fed_at = now if fed_now else None
        return Starter(
            name=name,
            flour_type=flour_type,
            feeding_ratio=feeding_ratio,
            feeding_frequency_hours=feeding_frequency_hours,
            starter_type=starter_type,
            is_active=True,
            last_fed_at=last_fed_at,
            next_feeding_due_at=(
                next_feeding_due(last_fed_at, feeding_frequency_hours) if last_fed_at else None
            ),
            health_status=HealthStatus.GOOD,
            created_at=now,
            notes=notes,
        )

    def record_feeding(self, starter: Starter, fed_at: datetime) -> Starter:
        """Mark the starter fed and reschedule its next feeding."""
        return replace(
            starter,
            last_fed_at=fed_at,
            next_feeding_due_at=next_feeding_due(fed_at, starter.feeding_frequency_hours),
        )

    def change_feeding_frequency(self, starter: Starter, frequency_hours: int) -> Starter:
        next_due = starter.next_feeding_due_at
        if starter.last_fed_at is not None:
            next_due = next_feeding_due(starter.last_fed_at, frequency_hours)
        return replace(
            starter,
            feeding_frequency_hours=frequency_hours,
            next_feeding_due_at=next_due,
        )

    def set_active(self, starter: Starter, is_active: bool, now: datetime) -> Starter:
        updated = replace(starter, is_active=is_active)
        return replace(updated, health_status=self._classify_starter(updated, now))

    def refresh_health(
        self,
        starter: Starter,
        recent_logs: Iterable[FeedingLog],
        now: datetime,
    ) -> Starter:
        """Recompute activity averages and health from recent feeding logs."""
        logs = [
            log for log in recent_logs if starter.id is None or log.starter_id == starter.id
        ]
        updated = replace(
            starter,
            avg_activity_level=average_activity_level(logs),
            avg_rise_time_hours=average_rise_time(logs),
        )
        status = self._classify_starter(updated, now)
        if status is not starter.health_status:
            logging.debug(
                "Starter %s health %s -> %s",
                starter.id,
                starter.health_status.value,
                status.value,
            )
        return replace(updated, health_status=status)

    def feeding_reminder(self, starter: Starter, now: datetime) -> Optional[FeedingReminder]:
        """Reminder content for the next feeding, if one should be scheduled."""
        due = starter.next_feeding_due_at
        if not starter.is_active or due is None or due <= now:
            return None
        return FeedingReminder(
            starter_id=starter.id,
            fires_at=due,
            title=f"Time to feed {starter.name}!",
            body=f"Your {starter.starter_type.display_name} starter needs feeding",
        )

    def _classify_starter(self, starter: Starter, now: datetime) -> HealthStatus:
        return classify(
            starter.is_active,
            now,
            starter.next_feeding_due_at,
            starter.avg_activity_level,
        )


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
