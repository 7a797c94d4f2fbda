"""Page-controller state for the catalog and the plant editor.

The catalog page keeps the loaded collection, the active query and the last
result in one explicit object instead of module globals. The collection is
only ever replaced wholesale after a fetch.
"""
from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Sequence

from scifanor.catalog.debounce import Debouncer
from scifanor.catalog.filters import (
    Aggregates,
    CatalogQuery,
    FilterResult,
    SortKey,
    apply_filters,
    compute_aggregates,
)
from scifanor.catalog.views import IMAGE_PARTS, PlantView
from scifanor.config import get_settings


class CatalogPageState:
    def __init__(self, on_result: Optional[Callable[[FilterResult], None]] = None,
                 debounce_ms: Optional[int] = None):
        self.collection: tuple[PlantView, ...] = ()
        self.query = CatalogQuery()
        self.result = apply_filters(self.collection, self.query)
        self.aggregates = compute_aggregates(self.collection)
        self.on_result = on_result
        if debounce_ms is None:
            debounce_ms = get_settings().search_debounce_ms
        self._search = Debouncer(self._apply_search, wait_ms=debounce_ms)

    def replace_collection(self, plants: Sequence[PlantView]) -> FilterResult:
        self.collection = tuple(plants)
        self.aggregates = compute_aggregates(self.collection)
        return self.refresh()

    def refresh(self) -> FilterResult:
        self.result = apply_filters(self.collection, self.query)
        if self.on_result is not None:
            self.on_result(self.result)
        return self.result

    def set_search(self, text: str) -> None:
        """Debounced: the query is evaluated once typing pauses."""
        self._search.call(text)

    def set_category(self, family: Optional[str]) -> FilterResult:
        self.query = replace(self.query, category_filter=family or None)
        return self.refresh()

    def set_sort(self, sort_key: SortKey | str) -> FilterResult:
        self.query = replace(self.query, sort_key=SortKey(sort_key))
        return self.refresh()

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def flush_search(self) -> None:
        self._search.flush()

    def _apply_search(self, text: str) -> None:
        self.query = replace(self.query, search_text=text)
        self.refresh()

    @property
    def stats(self) -> Aggregates:
        return self.aggregates


@dataclass
class EditorState:
    """Dashboard form state: which plant is being edited and staged photos."""

    editing_id: Optional[str] = None
    staged_images: dict[str, str] = field(default_factory=dict)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def start_create(self) -> None:
        self.editing_id = None
        self.staged_images = {}

    def start_edit(self, plant: PlantView) -> None:
        self.editing_id = plant.id
        self.staged_images = {
            part: url for part, url in plant.images.model_dump().items() if url
        }

    def stage_image(self, part: str, url: str) -> None:
        if part not in IMAGE_PARTS:
            raise ValueError(f"Unknown image part '{part}'")
        self.staged_images[part] = url

    def images_payload(self) -> dict[str, Optional[str]]:
        return {part: self.staged_images.get(part) for part in IMAGE_PARTS}
