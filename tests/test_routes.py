"""Tests for the JSON surface exposed to presentation code."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from animeshelf.main import register_routes
from animeshelf.models import EnrichedRecord
from animeshelf.services.details import DetailLoader
from animeshelf.services.tracker import TrackerService
from animeshelf.state import ShelfState


class DummyDetailLoader(DetailLoader):
    """Detail loader stub that resolves only the genres section."""

    def __init__(self, state: ShelfState) -> None:  # pragma: no cover - nothing to initialise
        # Deliberately skip super().__init__ to avoid touching external systems.
        self._state = state
        self.started: list[str] = []

    def start(self, record, token):  # type: ignore[override]
        self.started.append(record.catalog_id)
        self._state.apply_detail(token, "genres", genres=["Drama"])
        return []


def build_app(*, loaded: bool = True) -> tuple[FastAPI, ShelfState, DummyDetailLoader]:
    state = ShelfState()
    if loaded:
        state.replace_records(
            [
                EnrichedRecord(title="Monster", catalog_id="19", watch_order=2, notes="Tenma"),
                EnrichedRecord(title="Akira", catalog_id="fallback-Akira", watch_order=1),
                EnrichedRecord(title="Mushishi", catalog_id="error-Mushishi"),
            ]
        )
    loader = DummyDetailLoader(state)
    app = FastAPI()
    register_routes(app)
    app.state.tracker = TrackerService(
        state, [], orchestrator=None, detail_loader=loader  # type: ignore[arg-type]
    )
    return app, state, loader


def test_healthcheck() -> None:
    app, _, _ = build_app()

    with TestClient(app) as client:
        response = client.get("/healthz")

    assert response.json() == {"status": "ok"}


def test_list_reports_loading_without_partial_items() -> None:
    app, _, _ = build_app(loaded=False)

    with TestClient(app) as client:
        payload = client.get("/api/anime").json()

    assert payload["loading"] is True
    assert payload["items"] == []


def test_list_applies_current_view() -> None:
    app, _, _ = build_app()

    with TestClient(app) as client:
        default_payload = client.get("/api/anime").json()
        patched = client.patch("/api/view", json={"sortKey": "watchOrder"})
        ordered = client.get("/api/anime").json()
        client.patch("/api/view", json={"searchText": "tenma", "viewMode": "list"})
        searched = client.get("/api/anime").json()

    assert [item["title"] for item in default_payload["items"]] == ["Akira", "Monster", "Mushishi"]
    assert default_payload["items"][0]["catalogId"] == "fallback-Akira"
    assert patched.json() == {"sortKey": "watchOrder", "searchText": "", "viewMode": "tiles"}
    assert [item["title"] for item in ordered["items"]] == ["Akira", "Monster", "Mushishi"]
    assert [item["title"] for item in searched["items"]] == ["Monster"]
    assert searched["view"]["viewMode"] == "list"
    assert searched["total"] == 3


def test_view_rejects_unknown_sort_key() -> None:
    app, state, _ = build_app()

    with TestClient(app) as client:
        response = client.patch("/api/view", json={"sortKey": "popularity"})

    assert response.status_code == 400
    assert state.view.sort_key == "title"


def test_selection_lifecycle() -> None:
    app, _, loader = build_app()

    with TestClient(app) as client:
        selected = client.post("/api/selection/19").json()
        current = client.get("/api/selection").json()
        missing = client.post("/api/selection/unknown")
        closed = client.delete("/api/selection").json()

    assert loader.started == ["19"]
    assert selected["selected"]["title"] == "Monster"
    assert selected["detail"]["genres"] == ["Drama"]
    assert selected["detail"]["pending"] == ["externalLinks", "franchise", "streamers"]
    assert current["detail"]["catalogId"] == "19"
    assert missing.status_code == 404
    assert closed == {"selected": None, "detail": None}
