"""Food log entry service."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import uuid4
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from food_logger.domain.entries import DailySummary, Entry
from food_logger.domain.errors import InvalidRequestError
from food_logger.domain.nutrition import FoodItem, MacroBalance, NutritionFacts
from food_logger.domain.settings import UserSettings
from food_logger.services.storage import StorageBackend


@dataclass
class EntryService:
    """Creates, lists and deletes logged meals."""

    storage: StorageBackend

    def list_entries(
        self, day: date | None = None, timezone_name: str = "UTC"
    ) -> list[Entry]:
        """Return entries, optionally only those on a local calendar day."""
        entries = self.storage.list_entries()
        if day is None:
            return entries
        tz = resolve_timezone(timezone_name)
        return [entry for entry in entries if _local_day(entry, tz) == day]

    def create_entry(
        self,
        name: str,
        nutrition: NutritionFacts,
        items: list[FoodItem] | None = None,
        image_url: str | None = None,
    ) -> Entry:
        """Assign an id and timestamp and persist the entry."""
        entry = Entry(
            id=str(uuid4()),
            timestamp=datetime.now(tz=UTC),
            name=name,
            nutrition=nutrition,
            items=items,
            image_url=image_url,
        )
        self.storage.add_entry(entry)
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry; unknown ids are ignored."""
        self.storage.delete_entry(entry_id)

    def daily_summary(
        self,
        settings: UserSettings,
        day: date | None = None,
        timezone_name: str = "UTC",
    ) -> DailySummary:
        """Sum a day's entries and compare them with the goals."""
        tz = resolve_timezone(timezone_name)
        target = day or datetime.now(tz=tz).date()
        entries = self.list_entries(target, timezone_name)
        totals = MacroBalance(
            calories=sum(entry.nutrition.calories for entry in entries),
            protein=sum(entry.nutrition.protein for entry in entries),
            carbs=sum(entry.nutrition.carbs for entry in entries),
            fat=sum(entry.nutrition.fat for entry in entries),
        )
        return DailySummary(
            day=target,
            entry_count=len(entries),
            totals=totals,
            goals=settings.goals(),
            remaining=MacroBalance(
                calories=settings.daily_goal - totals.calories,
                protein=settings.protein_goal - totals.protein,
                carbs=settings.carbs_goal - totals.carbs,
                fat=settings.fat_goal - totals.fat,
            ),
        )


def resolve_timezone(timezone_name: str) -> ZoneInfo:
    """Return a ZoneInfo or raise InvalidRequestError for unknown names."""
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidRequestError(f"Unknown timezone: {timezone_name}") from exc


def _local_day(entry: Entry, tz: ZoneInfo) -> date:
    timestamp = entry.timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz).date()
