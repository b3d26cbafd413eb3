"""Integration tests for use cases.

Use cases run against the in-memory store and notifier.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from openpyxl import load_workbook

from application.use_cases import (
    ChangeFeedingFrequencyUseCase,
    CreateStarterUseCase,
    ExportFormulaUseCase,
    LoadRecipeUseCase,
    LogFeedingUseCase,
    RefreshStarterHealthUseCase,
    SaveRecipeUseCase,
    recent_feeding_logs,
)
from domain.exceptions import InvalidInputError, RecordNotFoundError
from domain.models import FeedingLog, Formula, HealthStatus, StarterType
from domain.services.starter_health import StarterScheduler
from infrastructure.notifications import InMemoryNotifier, NullNotifier
from infrastructure.persistence.excel_exporter import ExcelExporter
from infrastructure.persistence.record_store import InMemoryRecordStore, RecordKind

NOW = datetime(2024, 5, 1, 8, 0)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def notifier() -> InMemoryNotifier:
    return InMemoryNotifier()


@pytest.fixture
def scheduler() -> StarterScheduler:
    return StarterScheduler()


@pytest.fixture
def create_starter(store, scheduler, notifier) -> CreateStarterUseCase:
    return CreateStarterUseCase(store=store, scheduler=scheduler, notifier=notifier)


@pytest.fixture
def log_feeding(store, scheduler, notifier) -> LogFeedingUseCase:
    return LogFeedingUseCase(store=store, scheduler=scheduler, notifier=notifier)


class TestCreateStarter:
    def test_creates_and_schedules(self, create_starter, store, notifier) -> None:
        starter = create_starter.execute(
            name="Bubbles",
            flour_type="Rye",
            feeding_ratio="1:1:1",
            now=NOW,
            starter_type=StarterType.LEVAIN,
        )

        assert starter.id == 1
        assert store.get(RecordKind.STARTER, 1) == starter
        pending = notifier.pending()
        assert len(pending) == 1
        assert pending[0].notification_id == starter.reminder_id
        assert pending[0].starter_id == 1
        assert pending[0].fires_at == NOW + timedelta(hours=12)
        assert pending[0].body == "Your Levain starter needs feeding"

    def test_invalid_ratio(self, create_starter, store) -> None:
        with pytest.raises(InvalidInputError):
            create_starter.execute(name="Bubbles", flour_type="Rye", feeding_ratio="1:1", now=NOW)

        assert store.all(RecordKind.STARTER) == []


class TestLogFeeding:
    def test_updates_schedule_health_and_reminder(
        self, create_starter, log_feeding, store, notifier
    ) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)
        first_reminder = starter.reminder_id
        fed_at = NOW + timedelta(hours=11)

        updated = log_feeding.execute(
            starter.id,
            fed_at,
            activity_level=5,
            peak_time_hours=Decimal("4"),
            flour_amount_g=Decimal("50"),
            water_amount_g=Decimal("50"),
        )

        assert updated.last_fed_at == fed_at
        assert updated.next_feeding_due_at == fed_at + timedelta(hours=12)
        assert updated.avg_activity_level == Decimal("5")
        assert updated.avg_rise_time_hours == Decimal("4")
        assert updated.health_status is HealthStatus.EXCELLENT
        assert store.get(RecordKind.STARTER, starter.id) == updated

        pending = notifier.pending()
        assert [n.notification_id for n in pending] == [updated.reminder_id]
        assert updated.reminder_id != first_reminder
        assert pending[0].fires_at == updated.next_feeding_due_at

        logs = store.all(RecordKind.FEEDING_LOG)
        assert len(logs) == 1
        assert logs[0].starter_id == starter.id

    def test_averages_recent_logs(self, create_starter, log_feeding) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)

        log_feeding.execute(starter.id, NOW + timedelta(hours=12), activity_level=2)
        updated = log_feeding.execute(starter.id, NOW + timedelta(hours=24), activity_level=4)

        assert updated.avg_activity_level == Decimal("3")
        assert updated.health_status is HealthStatus.FAIR

    def test_missing_starter(self, log_feeding) -> None:
        with pytest.raises(RecordNotFoundError, match="Starter not found: 99"):
            log_feeding.execute(99, NOW)

    def test_invalid_observation(self, create_starter, log_feeding, store) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)

        with pytest.raises(InvalidInputError, match="Activity level"):
            log_feeding.execute(starter.id, NOW, activity_level=9)

        assert store.all(RecordKind.FEEDING_LOG) == []

    def test_recent_logs_newest_first(self, store) -> None:
        for hour in range(10):
            store.put(RecordKind.FEEDING_LOG, FeedingLog(starter_id=1, created_at=NOW + timedelta(hours=hour)))
        store.put(RecordKind.FEEDING_LOG, FeedingLog(starter_id=2, created_at=NOW))

        recent = recent_feeding_logs(store, 1, limit=3)

        assert [log.created_at.hour for log in recent] == [17, 16, 15]


class TestChangeFeedingFrequency:
    def test_reschedules(self, create_starter, store, scheduler, notifier) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)
        use_case = ChangeFeedingFrequencyUseCase(store=store, scheduler=scheduler, notifier=notifier)

        updated = use_case.execute(starter.id, 24, NOW + timedelta(hours=1))

        assert updated.feeding_frequency_hours == 24
        assert updated.next_feeding_due_at == NOW + timedelta(hours=24)
        pending = notifier.pending()
        assert len(pending) == 1
        assert pending[0].fires_at == NOW + timedelta(hours=24)

    def test_reminder_dropped_when_already_due(self, create_starter, store, scheduler, notifier) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)
        use_case = ChangeFeedingFrequencyUseCase(store=store, scheduler=scheduler, notifier=notifier)

        updated = use_case.execute(starter.id, 4, NOW + timedelta(hours=6))

        assert updated.reminder_id is None
        assert notifier.pending() == []
        assert updated.health_status is HealthStatus.FAIR


class TestRefreshStarterHealth:
    def test_refreshes_all(self, create_starter, store, scheduler) -> None:
        create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)
        create_starter.execute("Levi", "Wheat", "1:2:2", NOW, feeding_frequency_hours=48)
        use_case = RefreshStarterHealthUseCase(store=store, scheduler=scheduler)

        refreshed = use_case.execute(NOW + timedelta(hours=40))

        assert [s.health_status for s in refreshed] == [HealthStatus.POOR, HealthStatus.GOOD]
        assert store.get(RecordKind.STARTER, 1).health_status is HealthStatus.POOR

    def test_refresh_one(self, create_starter, store, scheduler) -> None:
        starter = create_starter.execute("Bubbles", "Rye", "1:1:1", NOW)
        use_case = RefreshStarterHealthUseCase(store=store, scheduler=scheduler)

        refreshed = use_case.execute(NOW + timedelta(hours=13), starter_id=starter.id)

        assert refreshed[0].health_status is HealthStatus.FAIR

    def test_refresh_missing(self, store, scheduler) -> None:
        with pytest.raises(RecordNotFoundError):
            RefreshStarterHealthUseCase(store=store, scheduler=scheduler).execute(NOW, starter_id=5)


class TestRecipes:
    def test_save_and_load(self, store) -> None:
        formula = Formula(flour_weight_g=500, water_percent=70, salt_percent=2, starter_percent=20)

        saved = SaveRecipeUseCase(store).execute("Country loaf", formula, description="Weekday bread")
        loaded = LoadRecipeUseCase(store).execute(saved.id)

        assert loaded == saved
        assert loaded.description == "Weekday bread"

    def test_overwrite(self, store) -> None:
        formula = Formula(flour_weight_g=500, water_percent=70)
        saved = SaveRecipeUseCase(store).execute("Country loaf", formula)

        SaveRecipeUseCase(store).execute("Country loaf v2", formula, recipe_id=saved.id)

        assert LoadRecipeUseCase(store).execute(saved.id).name == "Country loaf v2"

    def test_load_missing(self, store) -> None:
        with pytest.raises(RecordNotFoundError, match="Recipe not found"):
            LoadRecipeUseCase(store).execute(3)


class TestExportFormula:
    def test_export(self, tmp_path) -> None:
        output = tmp_path / "loaf.xlsx"
        formula = Formula(flour_weight_g=500, water_percent=70, salt_percent=2, starter_percent=20)

        ExportFormulaUseCase(ExcelExporter()).execute(formula, output, name="Loaf")

        wb = load_workbook(output)
        assert wb.sheetnames == ["Loaf"]


class TestNotifiers:
    def test_in_memory_cancel(self) -> None:
        notifier = InMemoryNotifier()
        first = notifier.schedule(1, NOW + timedelta(hours=2), "Feed", "Body")
        notifier.schedule(2, NOW + timedelta(hours=1), "Feed", "Body")

        notifier.cancel(first)
        notifier.cancel("unknown")

        assert [n.starter_id for n in notifier.pending()] == [2]
        assert notifier.due(NOW + timedelta(hours=1))[0].starter_id == 2
        assert notifier.due(NOW) == []

    def test_null_notifier_ids(self) -> None:
        notifier = NullNotifier()

        assert notifier.schedule(1, NOW, "Feed", "Body") != notifier.schedule(1, NOW, "Feed", "Body")
        notifier.cancel("null-1")
