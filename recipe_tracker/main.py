import logging

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from recipe_tracker import models  # noqa: F401
from recipe_tracker.api.dispatch import router as dispatch_router
from recipe_tracker.api.health import router as health_router
from recipe_tracker.api.operations import build_dispatcher
from recipe_tracker.core.config import settings
from recipe_tracker.core.database import Base, engine
from recipe_tracker.core.request_logging import RequestLoggingMiddleware


def create_app(bind: Engine | None = None) -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title=settings.app_name)
    app.add_middleware(RequestLoggingMiddleware)

    if settings.auto_create_tables:
        Base.metadata.create_all(bind=bind or engine)

    app.state.dispatcher = build_dispatcher()

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(dispatch_router, prefix=settings.api_prefix)
    return app


app = create_app()
