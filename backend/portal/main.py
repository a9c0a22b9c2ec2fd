# portal/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.config import settings
from portal.core.db import UserStore
from portal.api.handlers import register_exception_handlers
from portal.api.routers import auth, pages, profile, teams

logger = logging.getLogger("uvicorn.error")


def create_app(store: UserStore | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store adapter to inject; a new one is built from
            DATABASE_URL when omitted. Its connection is opened on startup
            and released on shutdown.
    """
    app = FastAPI(title=settings.APP_NAME)
    app.state.store = store or UserStore(settings.database_url, generate_schemas=settings.db_generate_schemas)

    # CORS (with Cookie)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup():
        if not settings.jwt_secret:
            logger.warning("[config] JWT_SECRET is not set -> authenticated routes will fail closed")
        await app.state.store.connect()

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.store.close()

    # REST
    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(teams.router)
    # Pages
    app.include_router(pages.router)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("portal.main:app", host=settings.host, port=settings.port)
