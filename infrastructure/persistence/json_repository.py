"""JSON persistence for starters, feeding logs and recipes.

Each record kind is kept in its own JSON file (a list of objects) under
the base directory.
"""

import json
import logging
import threading
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from domain.exceptions import InvalidRecordFileError
from domain.models import (
    FeedingLog,
    FeedingRatio,
    Formula,
    HealthStatus,
    Ingredient,
    IngredientCategory,
    IngredientUnit,
    Recipe,
    RecordId,
    Starter,
    StarterType,
)
from infrastructure.persistence.record_store import (
    R,
    Record,
    RecordKind,
    RecordStore,
    check_record_kind,
    next_record_id,
)


class JSONRecordStore(RecordStore):
    """Record store persisting each kind as a JSON file."""

    def __init__(self, base_directory: str = "saves") -> None:
        """Initialize store.

        Args:
            base_directory: Directory holding the JSON files
        """
        self._base_dir = Path(base_directory)
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def base_directory(self) -> Path:
        return self._base_dir

    def get(self, kind: RecordKind, record_id: RecordId) -> Optional[Record]:
        """Get a record."""
        with self._lock:
            for record in self._load(kind):
                if record.id == record_id:
                    return record
        return None

    def put(self, kind: RecordKind, record: R) -> R:
        """Insert or replace a record, assigning an ID when missing."""
        check_record_kind(kind, record)
        with self._lock:
            records = self._load(kind)
            if record.id is None:
                record = replace(record, id=next_record_id(records))
            for index, existing in enumerate(records):
                if existing.id == record.id:
                    records[index] = record
                    break
            else:
                records.append(record)
            self._save(kind, records)
        logging.debug("Stored %s id=%s", kind.value, record.id)
        return record

    def delete(self, kind: RecordKind, record_id: RecordId) -> bool:
        """Delete a record."""
        with self._lock:
            records = self._load(kind)
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._save(kind, remaining)
        return True

    def all(self, kind: RecordKind) -> List[Record]:
        """List every record of a kind."""
        with self._lock:
            return self._load(kind)

    def _file_path(self, kind: RecordKind) -> Path:
        return self._base_dir / f"{kind.value}.json"

    def _load(self, kind: RecordKind) -> List[Record]:
        file_path = self._file_path(kind)
        if not file_path.exists():
            return []

        decode = _DECODERS[kind]
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [decode(item) for item in data]

        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as exc:
            logging.error("Invalid record file %s: %s", file_path.name, exc)
            raise InvalidRecordFileError(f"Invalid record file: {file_path.name}") from exc

    def _save(self, kind: RecordKind, records: List[Record]) -> None:
        encode = _ENCODERS[kind]
        data = [encode(record) for record in records]
        with open(self._file_path(kind), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


# ============================================================================
# Serialization
# ============================================================================


def _dec(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _to_dec(value: Any) -> Optional[Decimal]:
    return None if value is None else Decimal(str(value))


def _dt(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else value.isoformat()


def _to_dt(value: Optional[str]) -> Optional[datetime]:
    return None if value is None else datetime.fromisoformat(value)


def starter_to_dict(starter: Starter) -> Dict[str, Any]:
    """Convert Starter to dictionary."""
    return {
        "id": starter.id,
        "name": starter.name,
        "type": starter.starter_type.value,
        "flour_type": starter.flour_type,
        "feeding_ratio": str(starter.feeding_ratio),
        "feeding_frequency_hours": starter.feeding_frequency_hours,
        "is_active": starter.is_active,
        "last_fed_at": _dt(starter.last_fed_at),
        "next_feeding_due_at": _dt(starter.next_feeding_due_at),
        "health_status": starter.health_status.value,
        "avg_activity_level": _dec(starter.avg_activity_level),
        "avg_rise_time_hours": _dec(starter.avg_rise_time_hours),
        "created_at": _dt(starter.created_at),
        "notes": starter.notes,
        "reminder_id": starter.reminder_id,
    }


def dict_to_starter(data: Dict[str, Any]) -> Starter:
    """Convert dictionary to Starter."""
    return Starter(
        id=data.get("id"),
        name=data["name"],
        starter_type=StarterType(data.get("type", StarterType.SOURDOUGH.value)),
        flour_type=data.get("flour_type", ""),
        feeding_ratio=FeedingRatio.parse(data["feeding_ratio"]),
        feeding_frequency_hours=int(data["feeding_frequency_hours"]),
        is_active=data.get("is_active", True),
        last_fed_at=_to_dt(data.get("last_fed_at")),
        next_feeding_due_at=_to_dt(data.get("next_feeding_due_at")),
        health_status=HealthStatus(data.get("health_status", HealthStatus.GOOD.value)),
        avg_activity_level=_to_dec(data.get("avg_activity_level")),
        avg_rise_time_hours=_to_dec(data.get("avg_rise_time_hours")),
        created_at=_to_dt(data.get("created_at")),
        notes=data.get("notes", ""),
        reminder_id=data.get("reminder_id"),
    )


def feeding_log_to_dict(log: FeedingLog) -> Dict[str, Any]:
    """Convert FeedingLog to dictionary."""
    return {
        "id": log.id,
        "starter_id": log.starter_id,
        "created_at": _dt(log.created_at),
        "activity_level": log.activity_level,
        "peak_time_hours": _dec(log.peak_time_hours),
        "starter_amount_g": _dec(log.starter_amount_g),
        "flour_amount_g": _dec(log.flour_amount_g),
        "water_amount_g": _dec(log.water_amount_g),
        "temperature": _dec(log.temperature),
        "notes": log.notes,
    }


def dict_to_feeding_log(data: Dict[str, Any]) -> FeedingLog:
    """Convert dictionary to FeedingLog."""
    return FeedingLog(
        id=data.get("id"),
        starter_id=data["starter_id"],
        created_at=_to_dt(data["created_at"]),
        activity_level=data.get("activity_level"),
        peak_time_hours=_to_dec(data.get("peak_time_hours")),
        starter_amount_g=_to_dec(data.get("starter_amount_g")),
        flour_amount_g=_to_dec(data.get("flour_amount_g")),
        water_amount_g=_to_dec(data.get("water_amount_g")),
        temperature=_to_dec(data.get("temperature")),
        notes=data.get("notes", ""),
    )


def recipe_to_dict(recipe: Recipe) -> Dict[str, Any]:
    """Convert Recipe to dictionary."""
    formula = recipe.formula
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "instructions": recipe.instructions,
        "yield_description": recipe.yield_description,
        "formula": {
            "flour_weight_g": str(formula.flour_weight_g),
            "water_percent": str(formula.water_percent),
            "salt_percent": str(formula.salt_percent),
            "starter_percent": str(formula.starter_percent),
            "starter_id": formula.starter_id,
            "additional_ingredients": [
                {
                    "name": ing.name,
                    "amount": str(ing.amount),
                    "unit": ing.unit.value,
                    "category": ing.category.value,
                }
                for ing in formula.additional_ingredients
            ],
        },
    }


def dict_to_recipe(data: Dict[str, Any]) -> Recipe:
    """Convert dictionary to Recipe."""
    formula_data = data["formula"]
    ingredients = tuple(
        Ingredient(
            name=ing["name"],
            amount=Decimal(str(ing["amount"])),
            unit=IngredientUnit(ing.get("unit", IngredientUnit.GRAMS.value)),
            category=IngredientCategory(ing.get("category", IngredientCategory.OTHER.value)),
        )
        for ing in formula_data.get("additional_ingredients", [])
    )
    formula = Formula(
        flour_weight_g=Decimal(str(formula_data["flour_weight_g"])),
        water_percent=Decimal(str(formula_data["water_percent"])),
        salt_percent=Decimal(str(formula_data.get("salt_percent", "0"))),
        starter_percent=Decimal(str(formula_data.get("starter_percent", "0"))),
        additional_ingredients=ingredients,
        starter_id=formula_data.get("starter_id"),
    )
    return Recipe(
        id=data.get("id"),
        name=data["name"],
        formula=formula,
        description=data.get("description", ""),
        instructions=data.get("instructions", ""),
        yield_description=data.get("yield_description", ""),
    )


_ENCODERS: Dict[RecordKind, Callable[[Any], Dict[str, Any]]] = {
    RecordKind.STARTER: starter_to_dict,
    RecordKind.FEEDING_LOG: feeding_log_to_dict,
    RecordKind.RECIPE: recipe_to_dict,
}

_DECODERS: Dict[RecordKind, Callable[[Dict[str, Any]], Any]] = {
    RecordKind.STARTER: dict_to_starter,
    RecordKind.FEEDING_LOG: dict_to_feeding_log,
    RecordKind.RECIPE: dict_to_recipe,
}
