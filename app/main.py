from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import describe, register_error_handlers
from app.core.logging import configure_logging
from app.database import Database
from app.routers.analytics import router as analytics_router
from app.routers.auth import router as auth_router
from app.routers.projects import router as projects_router
from app.routers.quotations import router as quotations_router
from app.routers.supplier_payments import router as supplier_payments_router
from app.routers.tasks import router as tasks_router
from app.routers.team_members import router as team_members_router
from app.routers.trash import router as trash_router

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(database: Optional[Database] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()

        db = database or Database.from_env()
        app.state.database = db

        try:
            logger.info("Database connected", extra={"database": db.ping()})
        except SQLAlchemyError as exc:
            # keep serving; every request will surface the failure itself
            logger.warning("Database not reachable on startup", extra={"error": str(exc)})

        try:
            yield
        finally:
            if database is None:
                db.dispose()

    app = FastAPI(
        title="Contractor Back Office",
        version=VERSION,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    @app.middleware("http")
    async def catch_unhandled_exceptions(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled exception", extra={"path": request.url.path})
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error", "details": describe(exc)},
            )

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(quotations_router)
    app.include_router(tasks_router)
    app.include_router(supplier_payments_router)
    app.include_router(team_members_router)
    app.include_router(trash_router)
    app.include_router(analytics_router)

    @app.get("/")
    def root():
        return {"status": "Contractor Back Office running"}

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "version": VERSION,
        }

    return app


app = create_app()
