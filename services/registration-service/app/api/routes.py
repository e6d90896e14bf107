"""HTTP route definitions for the registration service."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from schemas import (
    FieldViolation,
    RegisteredUser,
    RegistrationPayload,
    RegistrationRejected as RegistrationRejectedBody,
    ValidatedRegistration,
)

from ..config import get_settings
from ..domain.contracts import FieldError
from ..domain.errors import (
    AccountServiceError,
    AccountServiceNotConfigured,
    EmailAlreadyRegistered,
    RegistrationRejected,
)
from ..domain.service import RegistrationService
from ..security.rate_limiter import SlidingWindowRateLimiter
from ..security.redis_rate_limiter import RedisSlidingWindowRateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")

settings = get_settings()

_PAYLOAD_DOCS: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": RegistrationPayload.model_json_schema()}},
    }
}
_REJECTION_DOCS: dict[int | str, dict[str, Any]] = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": RegistrationRejectedBody},
}


def _build_rate_limiter() -> SlidingWindowRateLimiter | RedisSlidingWindowRateLimiter:
    """Instantiate the configured rate limiter backend, preferring Redis when available."""
    if settings.rate_limit_backend == "redis" and settings.redis_url:
        try:
            import redis

            client = redis.from_url(settings.redis_url)
            client.ping()
            logger.info("rate limiter configured for redis backend at %s", settings.redis_url)
            return RedisSlidingWindowRateLimiter(
                client,
                max_requests=settings.rate_limit_requests,
                window_seconds=settings.rate_limit_window_seconds,
            )
        except Exception as exc:  # pragma: no cover - depends on a live redis
            logger.warning("redis rate limiter unavailable, falling back to in-memory: %s", exc)

    logger.info("rate limiter using in-memory backend")
    return SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


rate_limiter = _build_rate_limiter()


def get_service(request: Request) -> RegistrationService:
    """Resolve the `RegistrationService` stored on the FastAPI application state."""
    service: RegistrationService = request.app.state.registration_service
    return service


def get_social_provider(request: Request) -> str | None:
    """Return the provider name set by the social-login gateway, if any."""
    value = request.headers.get(settings.social_provider_header, "").strip()
    return value or None


async def read_json_body(request: Request) -> Any:
    """Parse the body as untyped JSON; an unreadable body counts as no fields."""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except (ValueError, RecursionError):
        return None


def _rejection(errors: tuple[FieldError, ...]) -> JSONResponse:
    body = RegistrationRejectedBody(
        errors=[
            FieldViolation(field=error.field, kind=error.kind.value, message=error.message)
            for error in errors
        ]
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(mode="json"),
    )


@router.post(
    "/users/validate",
    response_model=ValidatedRegistration,
    responses=_REJECTION_DOCS,
    openapi_extra=_PAYLOAD_DOCS,
)
def validate_user(
    payload: Any = Depends(read_json_body),
    social_provider: str | None = Depends(get_social_provider),
    service: RegistrationService = Depends(get_service),
) -> ValidatedRegistration | JSONResponse:
    """Check a registration payload without creating an account."""
    result = service.validate(payload, social_provider=social_provider)
    if not result.ok:
        return _rejection(result.errors)
    request = result.unwrap()
    return ValidatedRegistration(
        name=request.name,
        email=request.email,
        has_password=request.has_password,
        social_login=social_provider is not None,
    )


@router.post(
    "/users",
    response_model=RegisteredUser,
    status_code=status.HTTP_201_CREATED,
    responses=_REJECTION_DOCS,
    openapi_extra=_PAYLOAD_DOCS,
)
def create_user(
    request: Request,
    payload: Any = Depends(read_json_body),
    social_provider: str | None = Depends(get_social_provider),
    service: RegistrationService = Depends(get_service),
) -> RegisteredUser | JSONResponse:
    """Validate a registration payload and create the account."""
    client_host = request.client.host if request.client else "unknown"
    if not rate_limiter.allow(f"register:{client_host}"):
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="rate limited")
    try:
        registration = service.register(payload, social_provider=social_provider)
    except RegistrationRejected as exc:
        return _rejection(exc.errors)
    except EmailAlreadyRegistered as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except AccountServiceNotConfigured as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except AccountServiceError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    return RegisteredUser(
        account_id=registration.account_id,
        name=registration.request.name,
        email=registration.request.email,
        has_password=registration.request.has_password,
        social_login=registration.social_login,
    )
