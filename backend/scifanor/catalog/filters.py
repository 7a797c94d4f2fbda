"""Client-side search, family filter, sort and aggregate stats.

Everything here is pure and works on an already-loaded collection of
``PlantView`` objects; no backend calls are made.
"""
import enum
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from scifanor.catalog.views import PlantView

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortKey(str, enum.Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    DATE_NEW = "date-new"
    DATE_OLD = "date-old"


class EmptyState(str, enum.Enum):
    NO_DATA = "no_data"
    NO_RESULTS = "no_results"


@dataclass(frozen=True)
class CatalogQuery:
    search_text: str = ""
    category_filter: Optional[str] = None
    sort_key: SortKey = SortKey.NAME_ASC

    @property
    def needle(self) -> str:
        return (self.search_text or "").strip().lower()

    @property
    def is_filtering(self) -> bool:
        return bool(self.needle or self.category_filter)


@dataclass(frozen=True)
class FilterResult:
    visible: list[PlantView]
    total_count: int
    visible_count: int
    filtering: bool = False

    @property
    def empty_state(self) -> Optional[EmptyState]:
        if self.total_count == 0:
            return EmptyState.NO_DATA
        if self.visible_count == 0 and self.filtering:
            return EmptyState.NO_RESULTS
        return None


@dataclass(frozen=True)
class Aggregates:
    contributor_count: int
    collaboration_count: int
    families: list[str] = field(default_factory=list)


def collation_key(value: Optional[str]) -> tuple[str, str]:
    """Locale-style ordering: accents and case only break ties."""
    value = value or ""
    folded = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in folded if not unicodedata.combining(ch)).casefold()
    return base, value


def _timestamp(plant: PlantView) -> datetime:
    moment = plant.created_at
    if moment is None:
        return EPOCH
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def matches_search(plant: PlantView, needle: str) -> bool:
    if not needle:
        return True
    return any(
        needle in (value or "").lower()
        for value in (plant.nama_indonesia, plant.nama_latin, plant.famili)
    )


def matches_category(plant: PlantView, category: Optional[str]) -> bool:
    return not category or plant.famili == category


def sort_plants(plants: Iterable[PlantView], sort_key: SortKey) -> list[PlantView]:
    sort_key = SortKey(sort_key)
    if sort_key in (SortKey.NAME_ASC, SortKey.NAME_DESC):
        return sorted(
            plants,
            key=lambda p: collation_key(p.nama_indonesia),
            reverse=sort_key is SortKey.NAME_DESC,
        )
    return sorted(plants, key=_timestamp, reverse=sort_key is SortKey.DATE_NEW)


def apply_filters(collection: Sequence[PlantView], query: CatalogQuery) -> FilterResult:
    needle = query.needle
    if not query.is_filtering:
        candidates = list(collection)
    else:
        candidates = [
            plant for plant in collection
            if matches_search(plant, needle) and matches_category(plant, query.category_filter)
        ]

    visible = sort_plants(candidates, query.sort_key)
    return FilterResult(
        visible=visible,
        total_count=len(collection),
        visible_count=len(visible),
        filtering=query.is_filtering,
    )


def compute_aggregates(collection: Iterable[PlantView]) -> Aggregates:
    """Stats over the full collection, never the filtered subset."""
    contributors: set[str] = set()
    collaboration_count = 0
    families: set[str] = set()

    for plant in collection:
        if plant.created_by:
            contributors.add(plant.created_by)
        for collaborator in plant.collaborators:
            if collaborator.user_id:
                contributors.add(collaborator.user_id)
        collaboration_count += len(plant.collaborators)
        if plant.famili:
            families.add(plant.famili)

    return Aggregates(
        contributor_count=len(contributors),
        collaboration_count=collaboration_count,
        families=sorted(families, key=collation_key),
    )
