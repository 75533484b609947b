"""Entry point for the FastAPI-powered anime shelf."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import settings
from .curated import load_curated_list
from .models import SortKey, ViewMode
from .services.details import DetailLoader
from .services.enrichment import EnrichmentOrchestrator, RecordEnricher
from .services.franchise import FranchiseAggregator
from .services.jikan import JikanClient
from .services.kitsu import KitsuClient
from .services.tracker import TrackerService
from .state import ShelfState

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


class ViewUpdate(BaseModel):
    """Partial update of the view parameters."""

    model_config = ConfigDict(populate_by_name=True)

    sort_key: SortKey | None = Field(default=None, alias="sortKey")
    search_text: str | None = Field(default=None, alias="searchText")
    view_mode: ViewMode | None = Field(default=None, alias="viewMode")


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    kitsu_http = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.kitsu_api_url),
            timeout=httpx.Timeout(20.0, connect=10.0),
        )
    )
    jikan_http = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.jikan_api_url),
            timeout=httpx.Timeout(15.0, connect=5.0),
        )
    )

    kitsu = KitsuClient(kitsu_http)
    jikan = JikanClient(jikan_http, settings.streaming_services)
    state = ShelfState()
    orchestrator = EnrichmentOrchestrator(
        RecordEnricher(kitsu),
        mode=settings.enrichment_mode,
        concurrency=settings.enrichment_concurrency,
        delay_seconds=settings.enrichment_delay_seconds,
    )
    detail_loader = DetailLoader(
        state,
        kitsu,
        jikan,
        FranchiseAggregator(kitsu, search_limit=settings.franchise_search_limit),
    )
    tracker = TrackerService(
        state,
        load_curated_list(settings.curated_list_path),
        orchestrator,
        detail_loader,
    )

    fastapi_app.state.tracker = tracker
    await tracker.start()

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await tracker.stop()
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Personal anime shelf enriched from Kitsu and Jikan",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_tracker(fastapi_app: FastAPI) -> TrackerService:
    tracker = getattr(fastapi_app.state, "tracker", None)
    if not isinstance(tracker, TrackerService):
        raise RuntimeError("Tracker service not initialised")
    return tracker


def _selection_payload(tracker: TrackerService) -> dict[str, Any]:
    selection = tracker.state.selection
    if selection is None:
        return {"selected": None, "detail": None}
    detail = selection.detail.model_dump(by_alias=True, mode="json")
    detail["pending"] = sorted(selection.detail.pending)
    return {"selected": selection.record.to_payload(), "detail": detail}


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/api/anime")
    async def list_anime() -> dict[str, Any]:
        state = get_tracker(fastapi_app).state
        if state.loading:
            items: list[dict[str, object]] = []
        else:
            items = [record.to_payload() for record in state.visible_records()]
        return {
            "loading": state.loading,
            "view": state.view.model_dump(by_alias=True),
            "total": len(state.records),
            "items": items,
        }

    @fastapi_app.get("/api/view")
    async def get_view() -> dict[str, Any]:
        return get_tracker(fastapi_app).state.view.model_dump(by_alias=True)

    @fastapi_app.patch("/api/view")
    async def update_view(payload: dict[str, Any]) -> dict[str, Any]:
        state = get_tracker(fastapi_app).state
        try:
            update = ViewUpdate.model_validate(payload)
            view = state.update_view(**update.model_dump(exclude_none=True))
        except ValidationError as exc:
            raise HTTPException(
                status_code=400, detail=exc.errors(include_url=False)
            ) from exc
        return view.model_dump(by_alias=True)

    @fastapi_app.post("/api/selection/{catalog_id}")
    async def select_anime(catalog_id: str) -> dict[str, Any]:
        tracker = get_tracker(fastapi_app)
        try:
            tracker.select(catalog_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _selection_payload(tracker)

    @fastapi_app.get("/api/selection")
    async def get_selection() -> dict[str, Any]:
        return _selection_payload(get_tracker(fastapi_app))

    @fastapi_app.delete("/api/selection")
    async def close_selection() -> dict[str, Any]:
        tracker = get_tracker(fastapi_app)
        tracker.close_selection()
        return _selection_payload(tracker)


app = create_app()
