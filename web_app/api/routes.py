"""API routes implementation."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request, status

from urlshortener.exceptions import URLShortenerError

from .schemas import (
    ErrorResponse,
    HealthResponse,
    ShortenRequest,
    ShortenResponse,
    URLInfoResponse,
)

router = APIRouter()

logger = logging.getLogger("url_shortener.api")


def _to_http_error(e: URLShortenerError) -> HTTPException:
    if e.status_code >= 500:
        logger.error(f"Internal error: {e}")
    return HTTPException(status_code=e.status_code, detail=str(e))


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Shorten a URL. Equivalent URLs always return the same code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        short_code = await service.shorten(body.url)
    except URLShortenerError as e:
        raise _to_http_error(e)

    return ShortenResponse(
        short_code=short_code,
        short_url=config.short_url(short_code),
        original_url=body.url,
    )


@router.get(
    "/urls/{short_code}",
    response_model=URLInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
    },
    summary="Get URL information",
    description="Get the stored record for a short code.",
)
async def get_url_info(request: Request, short_code: str):
    """Get information about a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        info = await service.get_url_info(short_code)
    except URLShortenerError as e:
        raise _to_http_error(e)

    return URLInfoResponse(short_url=config.short_url(short_code), **info)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    response = HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        database="healthy" if health["database"] else "unhealthy",
        cache="healthy" if health["cache"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
    if not health["overall"]:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=response.model_dump(mode="json"),
        )
    return response
