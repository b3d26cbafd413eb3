"""Dependency Injection container.

Provides centralized dependency management for the application.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from application.use_cases import (
    ChangeFeedingFrequencyUseCase,
    CreateStarterUseCase,
    ExportFormulaUseCase,
    LoadRecipeUseCase,
    LogFeedingUseCase,
    RefreshStarterHealthUseCase,
    SaveRecipeUseCase,
)
from config.constants import DATA_DIRECTORY, DATA_DIRECTORY_ENV
from config.logging_config import configure_logging
from domain.services.fermentation import BulkFermentationEstimator
from domain.services.starter_health import StarterScheduler
from infrastructure.notifications import FeedingNotifier, NullNotifier
from infrastructure.persistence.excel_exporter import ExcelExporter
from infrastructure.persistence.json_repository import JSONRecordStore
from infrastructure.persistence.record_store import RecordStore

load_dotenv()


class Container:
    """Dependency injection container.

    Provides singleton instances of services and use cases.
    """

    def __init__(
        self,
        data_directory: Optional[str | Path] = None,
        store: Optional[RecordStore] = None,
        notifier: Optional[FeedingNotifier] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """Initialize container.

        Args:
            data_directory: JSON store directory (if None, reads from environment)
            store: Record store (if None, uses JSONRecordStore)
            notifier: Feeding notifier (if None, uses NullNotifier)
            log_file: When set, root logging is configured to write there
        """
        if log_file is not None:
            configure_logging(filename=log_file)

        self._data_directory = Path(
            data_directory or os.getenv(DATA_DIRECTORY_ENV) or DATA_DIRECTORY
        )
        self._notifier = notifier if notifier is not None else NullNotifier()

        # Lazy-initialized singletons
        self._store: Optional[RecordStore] = store
        self._excel_exporter: Optional[ExcelExporter] = None

        self._scheduler: Optional[StarterScheduler] = None
        self._fermentation_estimator: Optional[BulkFermentationEstimator] = None

        self._create_starter_use_case: Optional[CreateStarterUseCase] = None
        self._log_feeding_use_case: Optional[LogFeedingUseCase] = None
        self._change_feeding_frequency_use_case: Optional[ChangeFeedingFrequencyUseCase] = None
        self._refresh_starter_health_use_case: Optional[RefreshStarterHealthUseCase] = None
        self._save_recipe_use_case: Optional[SaveRecipeUseCase] = None
        self._load_recipe_use_case: Optional[LoadRecipeUseCase] = None
        self._export_formula_use_case: Optional[ExportFormulaUseCase] = None

    @property
    def data_directory(self) -> Path:
        return self._data_directory

    # Infrastructure
    @property
    def store(self) -> RecordStore:
        """Get record store."""
        if self._store is None:
            self._store = JSONRecordStore(base_directory=str(self._data_directory))
        return self._store

    @property
    def notifier(self) -> FeedingNotifier:
        """Get feeding notifier."""
        return self._notifier

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    # Domain Services
    @property
    def scheduler(self) -> StarterScheduler:
        """Get starter scheduler."""
        if self._scheduler is None:
            self._scheduler = StarterScheduler()
        return self._scheduler

    @property
    def fermentation_estimator(self) -> BulkFermentationEstimator:
        """Get bulk fermentation estimator."""
        if self._fermentation_estimator is None:
            self._fermentation_estimator = BulkFermentationEstimator()
        return self._fermentation_estimator

    # Use Cases
    @property
    def create_starter(self) -> CreateStarterUseCase:
        """Get create starter use case."""
        if self._create_starter_use_case is None:
            self._create_starter_use_case = CreateStarterUseCase(
                store=self.store,
                scheduler=self.scheduler,
                notifier=self.notifier,
            )
        return self._create_starter_use_case

    @property
    def log_feeding(self) -> LogFeedingUseCase:
        """Get log feeding use case."""
        if self._log_feeding_use_case is None:
            self._log_feeding_use_case = LogFeedingUseCase(
                store=self.store,
                scheduler=self.scheduler,
                notifier=self.notifier,
            )
        return self._log_feeding_use_case

    @property
    def change_feeding_frequency(self) -> ChangeFeedingFrequencyUseCase:
        """Get change feeding frequency use case."""
        if self._change_feeding_frequency_use_case is None:
            self._change_feeding_frequency_use_case = ChangeFeedingFrequencyUseCase(
                store=self.store,
                scheduler=self.scheduler,
                notifier=self.notifier,
            )
        return self._change_feeding_frequency_use_case

    @property
    def refresh_starter_health(self) -> RefreshStarterHealthUseCase:
        """Get refresh starter health use case."""
        if self._refresh_starter_health_use_case is None:
            self._refresh_starter_health_use_case = RefreshStarterHealthUseCase(
                store=self.store,
                scheduler=self.scheduler,
            )
        return self._refresh_starter_health_use_case

    @property
    def save_recipe(self) -> SaveRecipeUseCase:
        """Get save recipe use case."""
        if self._save_recipe_use_case is None:
            self._save_recipe_use_case = SaveRecipeUseCase(self.store)
        return self._save_recipe_use_case

    @property
    def load_recipe(self) -> LoadRecipeUseCase:
        """Get load recipe use case."""
        if self._load_recipe_use_case is None:
            self._load_recipe_use_case = LoadRecipeUseCase(self.store)
        return self._load_recipe_use_case

    @property
    def export_formula(self) -> ExportFormulaUseCase:
        """Get export formula use case."""
        if self._export_formula_use_case is None:
            self._export_formula_use_case = ExportFormulaUseCase(self.excel_exporter)
        return self._export_formula_use_case
