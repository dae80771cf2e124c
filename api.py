import logging
from contextlib import asynccontextmanager

import uvicorn

from config import ApplicationConfig
from orgauth.adapter.email import build_email_dispatcher
from orgauth.api.app import create_app
from orgauth.app.auth_config import build_auth_config
from orgauth.depends import init_models

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app):
    if ApplicationConfig.AUTO_CREATE_TABLES:
        await init_models()
    yield


auth_config = build_auth_config(ApplicationConfig, build_email_dispatcher(ApplicationConfig))

app = create_app(
    auth_config,
    enable_logging_middleware=ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE,
    lifespan=lifespan,
)

if __name__ == "__main__":
    uvicorn.run(
        "api:app",
        host=ApplicationConfig.API_HOST,
        port=ApplicationConfig.API_PORT,
        reload=True,
        log_level=ApplicationConfig.LOG_LEVEL.lower(),
    )
