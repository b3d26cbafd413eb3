"""Application use cases.

Use cases orchestrate domain services and infrastructure to fulfill
business workflows: read a record, compute with the pure services,
write the result back and keep the feeding reminder in step.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from config.constants import DEFAULT_FEEDING_FREQUENCY_HOURS, RECENT_FEEDING_LOG_COUNT
from domain.exceptions import RecordNotFoundError
from domain.models import (
    FeedingLog,
    FeedingRatio,
    Formula,
    Recipe,
    RecordId,
    Starter,
    StarterType,
)
from domain.services.starter_health import StarterScheduler
from infrastructure.notifications import FeedingNotifier
from infrastructure.persistence.excel_exporter import ExcelExporter
from infrastructure.persistence.record_store import RecordKind, RecordStore


def _get_starter(store: RecordStore, starter_id: RecordId) -> Starter:
    starter = store.get(RecordKind.STARTER, starter_id)
    if starter is None:
        raise RecordNotFoundError(f"Starter not found: {starter_id}")
    return starter


def recent_feeding_logs(
    store: RecordStore,
    starter_id: RecordId,
    limit: int = RECENT_FEEDING_LOG_COUNT,
) -> List[FeedingLog]:
    """Newest feeding logs of a starter, newest first."""
    logs = [log for log in store.all(RecordKind.FEEDING_LOG) if log.starter_id == starter_id]
    logs.sort(key=lambda log: log.created_at, reverse=True)
    return logs[:limit]


def _reschedule_reminder(
    scheduler: StarterScheduler,
    notifier: FeedingNotifier,
    starter: Starter,
    now: datetime,
) -> Starter:
    """Cancel the starter's pending reminder and schedule the next one."""
    if starter.reminder_id is not None:
        notifier.cancel(starter.reminder_id)

    reminder = scheduler.feeding_reminder(starter, now)
    if reminder is None:
        return starter.with_reminder(None)

    reminder_id = notifier.schedule(
        starter_id=reminder.starter_id,
        fires_at=reminder.fires_at,
        title=reminder.title,
        body=reminder.body,
    )
    return starter.with_reminder(reminder_id)


class CreateStarterUseCase:
    """Create a starter and schedule its first feeding reminder."""

    def __init__(
        self,
        store: RecordStore,
        scheduler: StarterScheduler,
        notifier: FeedingNotifier,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._notifier = notifier

    def execute(
        self,
        name: str,
        flour_type: str,
        feeding_ratio: FeedingRatio | str,
        now: datetime,
        feeding_frequency_hours: int = DEFAULT_FEEDING_FREQUENCY_HOURS,
        starter_type: StarterType = StarterType.SOURDOUGH,
        notes: str = "",
    ) -> Starter:
        """Create starter.

        Args:
            name: Starter name
            flour_type: Flour the starter is fed with
            feeding_ratio: Feeding ratio, e.g. "1:1:1"
            now: Creation time; the starter counts as fed at this time
            feeding_frequency_hours: Hours between feedings
            starter_type: Kind of starter
            notes: Free-form notes

        Returns:
            The stored starter
        """
        starter = self._scheduler.create_starter(
            name=name,
            flour_type=flour_type,
            feeding_ratio=feeding_ratio,
            now=now,
            feeding_frequency_hours=feeding_frequency_hours,
            starter_type=starter_type,
            notes=notes,
        )
        # Stored first so the reminder carries the assigned ID
        starter = self._store.put(RecordKind.STARTER, starter)
        starter = _reschedule_reminder(self._scheduler, self._notifier, starter, now)
        starter = self._store.put(RecordKind.STARTER, starter)
        logging.debug("Created starter %s (%s)", starter.id, starter.name)
        return starter


class LogFeedingUseCase:
    """Record a feeding and bring the starter's schedule and health up to date."""

    def __init__(
        self,
        store: RecordStore,
        scheduler: StarterScheduler,
        notifier: FeedingNotifier,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._notifier = notifier

    def execute(
        self,
        starter_id: RecordId,
        fed_at: datetime,
        now: Optional[datetime] = None,
        **observations: Any,
    ) -> Starter:
        """Log a feeding.

        Args:
            starter_id: Starter that was fed
            fed_at: Feeding time
            now: Evaluation time for health (defaults to ``fed_at``)
            **observations: Optional FeedingLog fields (activity_level,
                peak_time_hours, starter_amount_g, flour_amount_g,
                water_amount_g, temperature, notes)

        Returns:
            The updated starter

        Raises:
            RecordNotFoundError: If the starter does not exist
            InvalidInputError: If an observation is out of range
        """
        now = fed_at if now is None else now
        starter = _get_starter(self._store, starter_id)

        log = FeedingLog(starter_id=starter_id, created_at=fed_at, **observations)
        self._store.put(RecordKind.FEEDING_LOG, log)

        starter = self._scheduler.record_feeding(starter, fed_at)
        starter = self._scheduler.refresh_health(
            starter, recent_feeding_logs(self._store, starter_id), now
        )
        starter = _reschedule_reminder(self._scheduler, self._notifier, starter, now)
        starter = self._store.put(RecordKind.STARTER, starter)

        logging.debug(
            "Logged feeding for starter %s, next due %s, health %s",
            starter_id,
            starter.next_feeding_due_at,
            starter.health_status.value,
        )
        return starter


class ChangeFeedingFrequencyUseCase:
    """Change how often a starter is fed."""

    def __init__(
        self,
        store: RecordStore,
        scheduler: StarterScheduler,
        notifier: FeedingNotifier,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._notifier = notifier

    def execute(self, starter_id: RecordId, frequency_hours: int, now: datetime) -> Starter:
        """Change feeding frequency.

        The next due time is recomputed from the last feeding and the
        reminder is rescheduled.
        """
        starter = _get_starter(self._store, starter_id)
        starter = self._scheduler.change_feeding_frequency(starter, frequency_hours)
        starter = self._scheduler.refresh_health(
            starter, recent_feeding_logs(self._store, starter_id), now
        )
        starter = _reschedule_reminder(self._scheduler, self._notifier, starter, now)
        starter = self._store.put(RecordKind.STARTER, starter)
        logging.debug("Starter %s feeding every %s hours", starter_id, frequency_hours)
        return starter


class RefreshStarterHealthUseCase:
    """Recompute the health of stored starters at a given time."""

    def __init__(self, store: RecordStore, scheduler: StarterScheduler) -> None:
        self._store = store
        self._scheduler = scheduler

    def execute(self, now: datetime, starter_id: Optional[RecordId] = None) -> List[Starter]:
        """Refresh health.

        Args:
            now: Evaluation time
            starter_id: Starter to refresh (all starters if None)

        Returns:
            The refreshed starters
        """
        if starter_id is None:
            starters = list(self._store.all(RecordKind.STARTER))
        else:
            starters = [_get_starter(self._store, starter_id)]

        refreshed = []
        for starter in starters:
            updated = self._scheduler.refresh_health(
                starter, recent_feeding_logs(self._store, starter.id), now
            )
            if updated != starter:
                updated = self._store.put(RecordKind.STARTER, updated)
            refreshed.append(updated)
        return refreshed


class SaveRecipeUseCase:
    """Save recipe to the record store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def execute(
        self,
        name: str,
        formula: Formula,
        recipe_id: Optional[RecordId] = None,
        description: str = "",
        instructions: str = "",
        yield_description: str = "",
    ) -> Recipe:
        """Save recipe.

        Args:
            name: Recipe name
            formula: Recipe formula
            recipe_id: Existing recipe to overwrite (new recipe if None)

        Returns:
            The stored recipe
        """
        recipe = Recipe(
            id=recipe_id,
            name=name,
            formula=formula,
            description=description,
            instructions=instructions,
            yield_description=yield_description,
        )
        recipe = self._store.put(RecordKind.RECIPE, recipe)
        logging.debug("Saved recipe %s (%s)", recipe.id, recipe.name)
        return recipe


class LoadRecipeUseCase:
    """Load recipe from the record store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def execute(self, recipe_id: RecordId) -> Recipe:
        """Load recipe.

        Raises:
            RecordNotFoundError: If the recipe does not exist
        """
        recipe = self._store.get(RecordKind.RECIPE, recipe_id)
        if recipe is None:
            raise RecordNotFoundError(f"Recipe not found: {recipe_id}")
        return recipe


class ExportFormulaUseCase:
    """Export formula to Excel."""

    def __init__(self, exporter: ExcelExporter) -> None:
        self._exporter = exporter

    def execute(
        self,
        formula: Formula,
        output_path: Path | str,
        name: str = "Formula",
    ) -> None:
        """Export formula to Excel.

        Args:
            formula: Formula to export
            output_path: Output file path
            name: Sheet title
        """
        self._exporter.export_formula(formula, output_path, name)
