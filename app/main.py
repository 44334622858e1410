from app.core.config import get_settings
from app.core.logging import configure_logging
from app.core.middleware import AccessLogMiddleware, RequestIdMiddleware
from app.api.errors import install_error_handlers
from app.api.v1.router import v1_router

from fastapi import FastAPI


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    install_error_handlers(app)

    # added last runs first: request id must exist before the access log reads it
    app.add_middleware(AccessLogMiddleware, exclude_paths={f"{settings.api_prefix}/ping"})
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    host, port = get_settings().server_host_port
    uvicorn.run("app.main:app", host=host, port=port)
