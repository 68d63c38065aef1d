"""
Tests for the view state controller
"""
import asyncio
import threading

import pytest

from acuatlas.catalog import CATALOG, LUNG_CHANNEL_IMAGE
from acuatlas.controller import QUERY_FAILED_NOTICE, DiagramState, ViewController
from acuatlas.gateway import DiagramUnavailableError, RemoteQueryError, normalize_suggestion
from acuatlas.models import SearchOutcome, SuggestedPoint


def _outcome(*ids, explanation="Explicación"):
    return SearchOutcome(
        explanation=explanation,
        points=[normalize_suggestion(SuggestedPoint(id=i, name=i)) for i in ids],
    )


class Recorder:
    """Stands in for a gateway function and records every call."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def __call__(self, arg):
        self.calls.append(arg)
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def view():
    return ViewController(CATALOG, query_fn=Recorder(_outcome("LU7", "LI4", "ST36")),
                          diagram_fn=Recorder("data:image/png;base64,QQ=="))


# ─── Queries ─────────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_successful_query_replaces_list(view):
    await view.submit_query("tos")
    assert [p.id for p in view.points] == ["LU7", "LI4", "ST36"]
    assert view.explanation == "Explicación"
    assert view.loading is False


@pytest.mark.asyncio
async def test_outcome_replaces_previous_outcome():
    fn = Recorder(_outcome("LU7", "LU5"))
    view = ViewController(CATALOG, query_fn=fn)
    await view.submit_query("tos")
    fn.result = _outcome("HT7", explanation="Insomnio")
    await view.submit_query("insomnio")
    assert [p.id for p in view.points] == ["HT7"]
    assert view.explanation == "Insomnio"


@pytest.mark.asyncio
@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
async def test_blank_query_restores_baseline_without_network(view, blank):
    await view.submit_query("tos")
    await view.submit_query(blank)
    assert view.points == list(CATALOG)
    assert view.explanation is None
    assert view._query_fn.calls == ["tos"]

    await view.submit_query(blank)
    assert view.points == list(CATALOG)


@pytest.mark.asyncio
async def test_failed_query_restores_baseline_and_notifies():
    fn = Recorder(_outcome("LU7"))
    view = ViewController(CATALOG, query_fn=fn)
    await view.submit_query("tos")

    fn.error = RemoteQueryError("boom")
    await view.submit_query("fiebre")
    assert view.points == list(CATALOG)
    assert view.explanation is None
    assert view.loading is False

    snap = view.snapshot()
    assert snap["notifications"] == [QUERY_FAILED_NOTICE]
    assert view.snapshot()["notifications"] == []


@pytest.mark.asyncio
async def test_latest_submission_wins_over_late_arrival():
    gate = threading.Event()

    def query_fn(text):
        if text == "lento":
            gate.wait(5)
            return _outcome("SP6", explanation="vieja")
        return _outcome("PC6", explanation="nueva")

    view = ViewController(CATALOG, query_fn=query_fn)
    first = asyncio.create_task(view.submit_query("lento"))
    await asyncio.sleep(0)
    assert view.loading is True

    await view.submit_query("rápido")
    gate.set()
    await first

    assert [p.id for p in view.points] == ["PC6"]
    assert view.explanation == "nueva"
    assert view.loading is False


@pytest.mark.asyncio
async def test_stale_query_failure_is_dropped():
    gate = threading.Event()

    def query_fn(text):
        if text == "lento":
            gate.wait(5)
            raise RemoteQueryError("timeout")
        return _outcome("PC6", explanation="nueva")

    view = ViewController(CATALOG, query_fn=query_fn)
    first = asyncio.create_task(view.submit_query("lento"))
    await asyncio.sleep(0)

    await view.submit_query("rápido")
    gate.set()
    await first

    assert [p.id for p in view.points] == ["PC6"]
    assert view.explanation == "nueva"
    assert view.loading is False
    assert view.snapshot()["notifications"] == []


@pytest.mark.asyncio
async def test_blank_query_supersedes_pending_request():
    gate = threading.Event()

    def query_fn(text):
        gate.wait(5)
        return _outcome("SP6")

    view = ViewController(CATALOG, query_fn=query_fn)
    pending = asyncio.create_task(view.submit_query("tos"))
    await asyncio.sleep(0)
    await view.submit_query("")
    gate.set()
    await pending
    assert view.points == list(CATALOG)


# ─── Filters ─────────────────────────────────────────────────────────────────
def test_filter_keeps_only_matching_meridian(view):
    before = {p.id for p in view.visible_points}
    view.toggle_filter("LI")
    visible = view.visible_points
    assert visible and all(p.meridian == "LI" for p in visible)
    assert {p.id for p in visible} <= before


def test_toggling_same_filter_twice_clears_it(view):
    view.toggle_filter("ST")
    view.toggle_filter("ST")
    assert view.active_filter is None
    assert view.visible_points == list(CATALOG)


def test_switching_filter(view):
    view.toggle_filter("ST")
    view.toggle_filter("KI")
    assert view.active_filter == "KI"


@pytest.mark.asyncio
async def test_filter_applies_to_search_results(view):
    await view.submit_query("tos")
    view.toggle_filter("LI")
    assert [p.id for p in view.visible_points] == ["LI4"]
    view.toggle_filter("HT")
    assert view.visible_points == []
    assert view._query_fn.calls == ["tos"]


@pytest.mark.asyncio
async def test_lung_filter_reloads_baseline(view):
    await view.submit_query("tos")
    view.toggle_filter("LU")
    assert view.points == list(CATALOG)
    assert [p.id for p in view.visible_points] == [f"LU{i}" for i in range(1, 12)]
    # explanation of the last search is left in place
    assert view.explanation == "Explicación"


@pytest.mark.asyncio
async def test_show_all_and_reset(view):
    await view.submit_query("tos")
    view.toggle_filter("ST")
    view.show_all()
    assert view.active_filter is None
    assert view.points == list(CATALOG)
    assert view.explanation is None

    await view.submit_query("tos")
    view.reset()
    assert view.query == ""
    assert view.points == list(CATALOG)


# ─── Detail view ─────────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_select_and_load_diagram(view):
    view.toggle_filter("LI")
    point = view.select(0)
    assert point.id == "LI4"
    assert view.diagram == DiagramState()

    state = await view.load_diagram()
    assert state == DiagramState(image="data:image/png;base64,QQ==")
    assert view._diagram_fn.calls == [point]


def test_select_out_of_range(view):
    with pytest.raises(IndexError):
        view.select(len(CATALOG))


@pytest.mark.asyncio
async def test_diagram_failure_degrades_to_error_state():
    view = ViewController(CATALOG, diagram_fn=Recorder(error=DiagramUnavailableError("none")))
    view.toggle_filter("ST")
    view.select(0)
    state = await view.load_diagram()
    assert state == DiagramState(error=True)
    assert view.selected.id == "ST36"


@pytest.mark.asyncio
async def test_stale_diagram_not_applied_to_new_selection():
    gate = threading.Event()

    def diagram_fn(point):
        if point.id == "LI4":
            gate.wait(5)
            return "data:image/png;base64,OLD"
        return "data:image/png;base64,NEW"

    view = ViewController(CATALOG, diagram_fn=diagram_fn)
    view.toggle_filter("LI")
    view.select(0)
    slow = asyncio.create_task(view.load_diagram())
    await asyncio.sleep(0)

    view.dismiss()
    view.select(1)
    assert view.selected.id == "LI11"
    await view.load_diagram()
    gate.set()
    await slow

    assert view.diagram.image == "data:image/png;base64,NEW"


@pytest.mark.asyncio
async def test_stale_diagram_failure_not_applied_to_new_selection():
    gate = threading.Event()

    def diagram_fn(point):
        if point.id == "LI4":
            gate.wait(5)
            raise DiagramUnavailableError("no payload")
        return "data:image/png;base64,NEW"

    view = ViewController(CATALOG, diagram_fn=diagram_fn)
    view.toggle_filter("LI")
    view.select(0)
    slow = asyncio.create_task(view.load_diagram())
    await asyncio.sleep(0)

    view.select(1)
    await view.load_diagram()
    gate.set()
    await slow

    assert view.selected.id == "LI11"
    assert view.diagram == DiagramState(image="data:image/png;base64,NEW")


def test_select_rejects_card_that_changed_under_caller(view):
    view.toggle_filter("LI")
    assert view.select(0, "LI4").id == "LI4"
    view.dismiss()
    with pytest.raises(ValueError):
        view.select(0, "LI11")
    assert view.selected is None


@pytest.mark.asyncio
async def test_dismiss_clears_selection(view):
    view.select(0)
    assert view.selected.static_image == LUNG_CHANNEL_IMAGE
    view.dismiss()
    assert view.selected is None
    assert await view.load_diagram() == DiagramState()
