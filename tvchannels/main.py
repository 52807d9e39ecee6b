from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tvchannels.config import Settings, settings as default_settings
from tvchannels.cors import cors_headers, cors_middleware
from tvchannels.db import Database
from tvchannels.errors import ChannelApiError
from tvchannels.routers.api_channels import router as api_channels_router

log = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="TV Channels API")

    app.state.settings = settings
    app.state.db = database or Database(settings.database_url)

    app.middleware("http")(cors_middleware)

    @app.exception_handler(ChannelApiError)
    async def _channel_api_error(request: Request, exc: ChannelApiError):
        if exc.status_code >= 500:
            log.error("Request failed (%s): %s", exc.status_code, exc.to_body())
        else:
            log.info("Request rejected (%s): %s", exc.status_code, exc.error)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_body(),
            headers=cors_headers(settings.cors_allow_origin),
        )

    @app.on_event("startup")
    def _startup():
        if settings.auto_create_tables:
            app.state.db.init()

    @app.on_event("shutdown")
    def _shutdown():
        app.state.db.dispose()

    @app.get("/healthz")
    def healthz():
        return {"ok": True, "db": app.state.db.check()}

    # Catch-all; must be registered last.
    app.include_router(api_channels_router)

    return app


logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(message)s",
)

app = create_app()
