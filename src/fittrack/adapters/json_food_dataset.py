"""Static food dataset backed by a local JSON file."""

import json
import logging
import re
import threading
from dataclasses import dataclass
from pathlib import Path

from fittrack.domain.errors import ServiceUnavailableError
from fittrack.domain.nutrition import FoodRecord, coerce_number

_KCAL = re.compile(r"(\d+(?:\.\d+)?)\s*kcal", re.IGNORECASE)
_NUMBER = re.compile(r"\d+(?:\.\d+)?")

_logger = logging.getLogger(__name__)


def parse_nutrient_text(value: object, *, energy: bool = False) -> float:
    """Extract a number from text such as ``"84 kj (20 kcal)"`` or ``"3.1 g"``."""
    if not isinstance(value, str):
        return max(0.0, coerce_number(value))
    if energy:
        kcal = _KCAL.search(value)
        if kcal:
            return float(kcal.group(1))
    match = _NUMBER.search(value)
    return float(match.group(0)) if match else 0.0


def record_from_row(row: object) -> FoodRecord | None:
    """Normalize one dataset row, or None when it has no usable name."""
    if not isinstance(row, dict):
        return None
    name = row.get("name") or row.get("food_link")
    if not isinstance(name, str) or not name.strip():
        return None
    identifier = row.get("food_link") or name
    brand = row.get("brand")
    return FoodRecord(
        id=str(identifier),
        name=name.strip(),
        brand=brand.strip() if isinstance(brand, str) and brand.strip() else None,
        calories=parse_nutrient_text(row.get("nutri_energy"), energy=True),
        protein_g=parse_nutrient_text(row.get("nutri_protein")),
        carbs_g=parse_nutrient_text(row.get("nutri_carbohydrate")),
        fat_g=parse_nutrient_text(row.get("nutri_fat")),
        fiber_g=parse_nutrient_text(row.get("nutri_fiber")),
        sugars_g=parse_nutrient_text(row.get("nutri_sugars")),
        serving=str(row.get("serving_size") or "100 g"),
    )


@dataclass(frozen=True)
class _Snapshot:
    mtime_ns: int
    records: tuple[FoodRecord, ...]


class JsonFoodDataset:
    """In-memory copy of a JSON food array, reloaded when the file changes.

    A reload builds a complete new snapshot and publishes it with a single
    attribute assignment, so readers see either the old or the new dataset.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._snapshot: _Snapshot | None = None
        self._lock = threading.Lock()

    def records(self) -> tuple[FoodRecord, ...]:
        """Return the current records, reloading if the file was modified."""
        mtime_ns = self._mtime_ns()
        snapshot = self._snapshot
        if snapshot is not None and snapshot.mtime_ns == mtime_ns:
            return snapshot.records
        with self._lock:
            snapshot = self._snapshot
            if snapshot is None or snapshot.mtime_ns != mtime_ns:
                snapshot = _Snapshot(mtime_ns=mtime_ns, records=self._load())
                self._snapshot = snapshot
                _logger.info(
                    "Loaded food dataset %s with %s items",
                    self.path,
                    len(snapshot.records),
                )
        return snapshot.records

    def _mtime_ns(self) -> int:
        try:
            return self.path.stat().st_mtime_ns
        except OSError as exc:
            _logger.error("Food dataset %s is not readable: %s", self.path, exc)
            raise ServiceUnavailableError(
                "Food database is temporarily unavailable"
            ) from exc

    def _load(self) -> tuple[FoodRecord, ...]:
        try:
            with self.path.open(encoding="utf-8") as handle:
                rows = json.load(handle)
        except (OSError, ValueError) as exc:
            _logger.error("Failed to load food dataset %s: %s", self.path, exc)
            raise ServiceUnavailableError(
                "Food database is temporarily unavailable"
            ) from exc
        if not isinstance(rows, list):
            raise ServiceUnavailableError("Food database is not a JSON array")
        records = (record_from_row(row) for row in rows)
        return tuple(record for record in records if record is not None)
