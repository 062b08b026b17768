import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from videoqueue.api.router import router
from videoqueue.core.errors import (
    AssetSourceError,
    InvalidStatusError,
    RemoteDeleteError,
    VideoNotFoundError,
    VideoQueueError,
)
from videoqueue.core.logging import setup_logging
from videoqueue.core.settings import Settings, get_settings
from videoqueue.db.base import Base
from videoqueue.db.session import make_engine, make_session_factory
from videoqueue.services.cursor import CursorStore
from videoqueue.services.immich import ImmichAssetSource, ImmichClient

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(VideoNotFoundError)
    async def not_found(request: Request, exc: VideoNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(InvalidStatusError)
    async def invalid_status(request: Request, exc: InvalidStatusError):
        return _error(400, str(exc))

    @app.exception_handler(AssetSourceError)
    async def asset_source(request: Request, exc: AssetSourceError):
        return _error(502, str(exc))

    @app.exception_handler(RemoteDeleteError)
    async def remote_delete(request: Request, exc: RemoteDeleteError):
        # Immich's own status and body are passed through unchanged
        return _error(exc.status_code or 502, exc.body)

    @app.exception_handler(VideoQueueError)
    async def queue_error(request: Request, exc: VideoQueueError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return _error(500, str(exc))


def create_app(
    settings: Optional[Settings] = None,
    local_engine: Optional[Engine] = None,
    immich_engine: Optional[Engine] = None,
    immich_client: Optional[ImmichClient] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, structured=settings.log_structured)

    app = FastAPI(title="Video Queue Backend", version="0.1.0")

    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type"],
    )

    local_engine = local_engine or make_engine(settings.database_url)
    immich_engine = immich_engine or make_engine(settings.immich_database_url)

    Base.metadata.create_all(bind=local_engine)

    app.state.settings = settings
    app.state.session_factory = make_session_factory(local_engine)
    app.state.cursor_store = CursorStore(settings.cursor_file)
    app.state.immich_source = ImmichAssetSource(
        immich_engine, excluded_extensions=settings.excluded_extension_list
    )
    app.state.immich_client = immich_client or ImmichClient(
        settings.immich_host,
        settings.immich_token,
        timeout=settings.immich_timeout_seconds,
    )

    register_error_handlers(app)
    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.app_host, port=settings.app_port)
