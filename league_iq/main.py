# league_iq/main.py
from __future__ import annotations

import json
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from league_iq import models  # noqa: F401  (import registers models with Base)

# --- DB bootstrapping: create tables at startup ---
from league_iq.db import Base, engine

from .config import LOG_LEVEL
from .errors import AdapterUnavailable

# Routers
from .routers import (
    activity,
    gameweeks,
    gw1,
    health,
    league,
    snapshots,
    standings,
    trends,
)

# ---------- App ----------
app = FastAPI(title="LeagueIQ", version="0.1.0")


# Create tables once on app start
@app.on_event("startup")
def _create_tables() -> None:
    Base.metadata.create_all(bind=engine)


# ---------- Minimal structured logging ----------
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger("league_iq")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    duration_ms = (time.perf_counter() - start) * 1000.0
    log_obj = {
        "msg": "request",
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "query": request.url.query or None,
        "status": response.status_code,
        "duration_ms": round(duration_ms, 2),
    }
    logger.info(json.dumps(log_obj, separators=(",", ":")))
    return response


# ---------- Errors ----------
@app.exception_handler(AdapterUnavailable)
async def adapter_unavailable(request: Request, exc: AdapterUnavailable):
    logger.error(
        json.dumps(
            {
                "msg": "adapter_unavailable",
                "path": request.url.path,
                "league_id": exc.league_id,
                "gw": exc.gw,
                "error": str(exc),
            },
            separators=(",", ":"),
        )
    )
    return JSONResponse(status_code=503, content={"detail": "League data is temporarily unavailable"})


def _include_router_flex(app: FastAPI, module) -> None:
    for attr in ("router", "route"):
        if hasattr(module, attr):
            app.include_router(getattr(module, attr))
            return
    name = getattr(module, "__name__", str(module))
    raise RuntimeError(f"Module {name} does not define `router` or `route`")


# ---------- Include Routers ----------
_include_router_flex(app, health)  # /health
_include_router_flex(app, league)  # /leagues
_include_router_flex(app, gameweeks)  # /gameweeks
_include_router_flex(app, snapshots)  # /snapshots
_include_router_flex(app, standings)  # /standings
_include_router_flex(app, activity)  # /activity
_include_router_flex(app, trends)  # /trends
_include_router_flex(app, gw1)  # /gw1-table
