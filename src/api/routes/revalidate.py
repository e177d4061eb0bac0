"""Webhook used by the catalog platform to invalidate cached pages."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Header, Request, status
from fastapi.responses import JSONResponse

from src.api.dependencies import RevalidationDependency, SettingsDependency
from src.errors import AuthorizationError, ConfigurationError
from src.models.revalidation import RevalidationRequest, RevalidationResponse
from src.services.revalidation import verify_bearer_secret

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["revalidation"])


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post(
    "/revalidate",
    response_model=RevalidationResponse,
    summary="Purge cached pages affected by a catalog change",
)
async def revalidate(
    request: Request,
    settings: SettingsDependency,
    service: RevalidationDependency,
    authorization: Annotated[str | None, Header()] = None,
):
    try:
        verify_bearer_secret(authorization, settings.REVALIDATE_SECRET)
    except ConfigurationError:
        return _error("Configuration error", status.HTTP_500_INTERNAL_SERVER_ERROR)
    except AuthorizationError:
        return _error("Unauthorized", status.HTTP_401_UNAUTHORIZED)

    try:
        body = await request.json()
        # Bodies that are not objects carry no type and take the fallback path.
        payload = RevalidationRequest.model_validate(
            body if isinstance(body, dict) else {}
        )
        result = await service.revalidate(payload)
    except Exception:
        logger.exception("Revalidation error")
        return _error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RevalidationResponse(
        message=result.message,
        timestamp=datetime.now(UTC).isoformat(),
        purged=result.purged,
    )


@router.api_route(
    "/revalidate",
    methods=["GET", "PUT", "DELETE"],
    include_in_schema=False,
)
async def revalidate_method_not_allowed() -> JSONResponse:
    return _error("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)
