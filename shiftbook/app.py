"""Shiftbook API: FastAPI application.

Serves one driver's shift collection together with period summaries
and chart series computed from it.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

from . import __version__
from .aggregation import period_report
from .calculations import compute_net, distance_km
from .charts import build_series, period_headline
from .config import ServiceConfig, get_config
from .models import ChartBucket, Period, PeriodHeadline, PeriodReport, Shift, parse_timestamp
from .storage import JSONGateway, create_backend
from .store import ShiftStore

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class ShiftView(BaseModel):
    """Shift as shown in the list, with its derived figures."""
    shift: Shift
    net: float
    distance_km: float

    @classmethod
    def from_shift(cls, shift: Shift) -> "ShiftView":
        return cls(shift=shift, net=compute_net(shift), distance_km=distance_km(shift))


class DeleteResponse(BaseModel):
    status: str = "deleted"
    id: str


def _reference(value: Optional[str]) -> datetime:
    if value is None:
        return datetime.now()
    try:
        return parse_timestamp(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date: {value}")


def get_store(request: Request) -> ShiftStore:
    store = getattr(request.app.state, "store", None)
    if store is None or not store.is_loaded:
        raise HTTPException(status_code=503, detail="Shift store not loaded")
    return store


def get_service_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def create_app(config: Optional[ServiceConfig] = None) -> FastAPI:
    """Build the application; the store is created and loaded on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        service_config = config or get_config()
        backend = create_backend(service_config.storage)
        store = ShiftStore(JSONGateway(backend), key=service_config.storage.key)
        await store.load()
        app.state.config = service_config
        app.state.store = store
        logger.info(f"Shiftbook API v{app.version} started")
        logger.info(f"Storage backend: {backend.__class__.__name__}")
        yield
        logger.info("Shutting down")

    app = FastAPI(
        title="Shiftbook",
        description="Shift earnings ledger with day/week/month summaries",
        version=__version__,
        lifespan=lifespan,
    )

    # ---------------------------------------------------------------------------
    # Health Check
    # ---------------------------------------------------------------------------

    @app.get("/health")
    async def health(request: Request):
        store = getattr(request.app.state, "store", None)
        return {
            "status": "healthy",
            "service": "shiftbook",
            "version": app.version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "storage": store.gateway.backend.__class__.__name__ if store else "not initialized",
            "shifts": len(store.current()) if store else 0,
        }

    # ---------------------------------------------------------------------------
    # Shifts
    # ---------------------------------------------------------------------------

    @app.get("/shifts", response_model=list[ShiftView])
    async def list_shifts(store: ShiftStore = Depends(get_store)):
        """All shifts, newest first."""
        return [ShiftView.from_shift(s) for s in store.sorted_by_date()]

    @app.get("/shifts/{shift_id}", response_model=ShiftView)
    async def get_shift(shift_id: str, store: ShiftStore = Depends(get_store)):
        shift = store.get(shift_id)
        if shift is None:
            raise HTTPException(status_code=404, detail=f"Shift {shift_id} not found")
        return ShiftView.from_shift(shift)

    @app.post("/shifts", response_model=ShiftView)
    async def save_shift(shift: Shift, store: ShiftStore = Depends(get_store)):
        """Create a shift, or replace the one with the same id."""
        saved = await store.upsert(shift)
        logger.info(f"Saved shift {saved.id} dated {saved.date:%Y-%m-%d}")
        return ShiftView.from_shift(saved)

    @app.delete("/shifts/{shift_id}", response_model=DeleteResponse)
    async def delete_shift(shift_id: str, store: ShiftStore = Depends(get_store)):
        if not await store.delete(shift_id):
            raise HTTPException(status_code=404, detail=f"Shift {shift_id} not found")
        logger.info(f"Deleted shift {shift_id}")
        return DeleteResponse(id=shift_id)

    # ---------------------------------------------------------------------------
    # Summaries
    # ---------------------------------------------------------------------------

    @app.get("/summary", response_model=PeriodReport)
    async def get_summary(
        period: Period = Period.DAY,
        date: Optional[str] = None,
        store: ShiftStore = Depends(get_store),
    ):
        """Totals and shifts of the period containing ``date`` (default: now)."""
        return period_report(store.current(), period, _reference(date))

    @app.get("/series", response_model=list[ChartBucket])
    async def get_series(
        period: Period = Period.DAY,
        today: Optional[str] = None,
        length: Optional[int] = Query(None, ge=1, le=366),
        store: ShiftStore = Depends(get_store),
        service_config: ServiceConfig = Depends(get_service_config),
    ):
        """Trailing chart buckets, oldest first."""
        if length is None:
            length = service_config.charts.length_for(period)
        return build_series(store.current(), period, _reference(today), length)

    @app.get("/headline", response_model=PeriodHeadline)
    async def get_headline(
        period: Period = Period.DAY,
        today: Optional[str] = None,
        store: ShiftStore = Depends(get_store),
    ):
        return period_headline(store.current(), period, _reference(today))

    return app


app = create_app()
