import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
import uvicorn

from core.async_engine import build_async_engine, build_session_factory, create_schema
from core.errors import register_exception_handlers
from core.settings import Settings
from core.templating import STATIC_DIR
from api.api import api_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    engine = build_async_engine(settings)
    try:
        await create_schema(engine)
    except Exception:
        # Refuse to serve against a schema we could not verify
        logger.exception("DB init error")
        await engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("DB connections released")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.getLogger().setLevel(settings.python_log_level)

    app = FastAPI(title="Opinion Poll", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    register_exception_handlers(app)
    app.mount("/public", StaticFiles(directory=str(STATIC_DIR)), name="public")
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    settings = Settings()
    run_args = {
        "app": "main:create_app",
        "factory": True,
        "host": settings.SERVER_ADDRESS,
        "port": settings.SERVER_PORT,
        "log_level": settings.LOG_LEVEL,
        "reload": settings.WATCH_FILES,
    }

    logger.info(f"Server running on {settings.SERVER_PORT}")
    uvicorn.run(**run_args)
