from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from mycircle.config import Settings, load_settings
from mycircle.db import init_db
from mycircle.middleware import register_error_handlers
from mycircle.routes import contacts, interactions, recommendations, reminders, tags
from mycircle.services import Clock, build_services, system_clock


def create_app(
    settings: Settings | None = None,
    db_path: Path | None = None,
    clock: Clock = system_clock,
) -> FastAPI:
    settings = settings or load_settings()
    db_path = db_path or settings.db_path
    init_db(db_path)

    app = FastAPI(title="MyCircle")
    app.state.settings = settings
    app.state.services = build_services(db_path, clock)
    register_error_handlers(app)

    app.include_router(contacts.router)
    app.include_router(tags.router)
    app.include_router(interactions.router)
    app.include_router(reminders.router)
    app.include_router(recommendations.router)

    @app.get("/", include_in_schema=False)
    async def index(request: Request):
        return RedirectResponse(url="/docs", status_code=302)

    return app
