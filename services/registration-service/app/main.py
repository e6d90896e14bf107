"""FastAPI application wiring for the registration service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .account_client import HttpAccountGateway, build_http_client
from .api.routes import router as v1_router
from .config import get_settings
from .domain.service import RegistrationService

settings = get_settings()

logging.getLogger("app").setLevel(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise shared resources (account service client, services) for the app lifecycle."""
    client = None
    gateway = None
    if settings.account_service_url:
        client = build_http_client(
            settings.account_service_url, settings.account_service_timeout_seconds
        )
        gateway = HttpAccountGateway(client)
    else:
        logger.warning("ACCOUNT_SERVICE_URL not set; registrations will only be validated")
    app.state.registration_service = RegistrationService(gateway)
    try:
        yield
    finally:
        if client is not None:
            client.close()


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)


@app.get("/healthz", tags=["health"])
def healthz() -> dict[str, str]:
    """Return a minimal readiness indicator used by orchestration systems."""
    return {"status": "ok"}


@app.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(v1_router)
