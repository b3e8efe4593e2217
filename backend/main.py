from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.routes import calendar
from backend.settings import get_settings
from taskcal.errors import InvalidTimestamp


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.backend_log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="Task Calendar API", version="0.1.0")

    app.include_router(calendar.router)

    @app.exception_handler(InvalidTimestamp)
    async def _invalid_timestamp_handler(request: Request, exc: InvalidTimestamp):
        logging.getLogger("backend").info("Rejected invalid timestamp: %s", exc)
        return JSONResponse(status_code=422, content={"detail": str(exc), "value": repr(exc.value)})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
