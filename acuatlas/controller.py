# acuatlas/controller.py
"""
View State Controller
=====================
Holds what the page shows and reconciles gateway results with the catalog:

  points         - displayed list before meridian filtering
  active_filter  - meridian code or None
  selected       - point open in the detail view, or None
  loading        - a symptom query is in flight
  explanation    - prose of the current search outcome, or None
  diagram        - loading / image / error sub-state of the detail view

Gateway calls are blocking SDK calls, pushed to the default executor.
Overlapping requests are not cancelled; each submission (and each selection)
takes a sequence number and only the latest one may touch the state.
"""
import asyncio
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, TypeVar

from acuatlas.gateway import (
    DiagramUnavailableError,
    RemoteQueryError,
    generate_diagram,
    query_by_symptom,
)
from acuatlas.models import Point, SearchOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUERY_FAILED_NOTICE = "Error en el motor IA. Restaurando base de datos local."

# Only the lung button reloads the baseline when toggled; the other thirteen
# meridian buttons filter whatever list is displayed.
BASELINE_RELOAD_MERIDIAN = "LU"


@dataclass(frozen=True)
class DiagramState:
    loading: bool = False
    image: str | None = None
    error: bool = False


class ViewController:
    def __init__(
        self,
        catalog: Iterable[Point],
        query_fn: Callable[[str], SearchOutcome] = query_by_symptom,
        diagram_fn: Callable[[Point], str] = generate_diagram,
    ):
        self.catalog: tuple[Point, ...] = tuple(catalog)
        self._query_fn = query_fn
        self._diagram_fn = diagram_fn

        self.points: list[Point] = list(self.catalog)
        self.active_filter: str | None = None
        self.selected: Point | None = None
        self.loading = False
        self.explanation: str | None = None
        self.query = ""
        self.diagram = DiagramState()
        self.notifications: list[str] = []

        self._query_seq = 0
        self._diagram_seq = 0

    # ─── Displayed list ──────────────────────────────────────────────────────
    @property
    def visible_points(self) -> list[Point]:
        if not self.active_filter:
            return list(self.points)
        return [p for p in self.points if p.meridian == self.active_filter]

    def restore_baseline(self):
        self.points = list(self.catalog)
        self.explanation = None

    async def submit_query(self, text: str):
        self.query = text or ""
        self._query_seq += 1
        seq = self._query_seq

        if not self.query.strip():
            self.loading = False
            self.restore_baseline()
            return

        self.loading = True
        try:
            outcome = await self._run(self._query_fn, self.query)
        except RemoteQueryError as e:
            if seq != self._query_seq:
                logger.info("dropping failure of superseded query #%d: %s", seq, e)
                return
            logger.warning("query failed, restoring catalog: %s", e)
            self.notifications.append(QUERY_FAILED_NOTICE)
            self.restore_baseline()
            return
        finally:
            if seq == self._query_seq:
                self.loading = False

        if seq != self._query_seq:
            logger.info("dropping result of superseded query #%d", seq)
            return
        self.points = list(outcome.points)
        self.explanation = outcome.explanation

    def toggle_filter(self, code: str):
        self.active_filter = None if code == self.active_filter else code
        if code == BASELINE_RELOAD_MERIDIAN:
            self.points = list(self.catalog)

    def show_all(self):
        self.active_filter = None
        self.restore_baseline()

    def reset(self):
        self.query = ""
        self.active_filter = None
        self.restore_baseline()

    # ─── Detail view ─────────────────────────────────────────────────────────
    def select(self, index: int, point_id: str | None = None) -> Point:
        """Open the card at `index` of the visible list.

        With `point_id`, the card must still carry that id; a list that changed
        under the caller raises ValueError instead of opening another point.
        """
        visible = self.visible_points
        if index < 0 or index >= len(visible):
            raise IndexError(f"no card at position {index}")
        if point_id is not None and visible[index].id != point_id:
            raise ValueError(f"card {index} is {visible[index].id}, not {point_id}")
        self.selected = visible[index]
        self._diagram_seq += 1
        self.diagram = DiagramState()
        return self.selected

    def dismiss(self):
        self.selected = None
        self._diagram_seq += 1
        self.diagram = DiagramState()

    async def load_diagram(self) -> DiagramState:
        point = self.selected
        if point is None:
            return self.diagram
        seq = self._diagram_seq

        self.diagram = DiagramState(loading=True)
        try:
            image = await self._run(self._diagram_fn, point)
        except DiagramUnavailableError as e:
            if seq == self._diagram_seq:
                logger.warning("diagram for %s unavailable: %s", point.id, e)
                self.diagram = DiagramState(error=True)
            return self.diagram

        if seq != self._diagram_seq:
            logger.info("dropping diagram for %s, selection changed", point.id)
            return self.diagram
        self.diagram = DiagramState(image=image)
        return self.diagram

    # ─── Helpers ─────────────────────────────────────────────────────────────
    async def _run(self, fn: Callable[..., T], *args) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(fn, *args))

    def snapshot(self) -> dict:
        notices, self.notifications = self.notifications, []
        return {
            "query": self.query,
            "loading": self.loading,
            "explanation": self.explanation,
            "active_filter": self.active_filter,
            "total": len(self.points),
            "points": [p.model_dump() for p in self.visible_points],
            "selected": self.selected.id if self.selected else None,
            "notifications": notices,
        }
