import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from orgauth.adapter.oauth import build_oauth
from orgauth.app.auth_config import AuthConfig

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning("Client error on %s: %s", request.url.path, exc.base_error.code)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.as_dict()})


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(
        "Server error on %s: %s: %s",
        request.url.path,
        exc.base_error.code,
        exc.base_error.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.as_dict()})


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        ms,
    )
    return response


def create_app(
    auth_config: AuthConfig, enable_logging_middleware: bool = False, lifespan=None
) -> FastAPI:
    """
    Build the ASGI application around an already validated AuthConfig.

    The config is stored on app.state and read by the get_auth_config
    dependency; nothing in request handling reads process globals.
    """
    app = FastAPI(title="orgauth", version="0.1.0", lifespan=lifespan)

    app.state.auth_config = auth_config
    app.state.oauth = build_oauth(auth_config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(auth_config.trusted_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Holds the OAuth state between the provider redirect and the callback
    app.add_middleware(
        SessionMiddleware,
        secret_key=auth_config.secret,
        https_only=auth_config.secure_cookies,
        same_site="lax",
    )

    if enable_logging_middleware:
        app.middleware("http")(log_requests)

    from orgauth.api.routes import auth, health_check, organization
    from orgauth.web import routes as web

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router)
    app.include_router(organization.router)
    app.include_router(web.router)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
