"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    LinkInfoResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortlink.common.url_builder import build_short_url
from shortlink.common.headers import build_base_url
from shortlink.errors import InvalidUrlError, StoreError

router = APIRouter()


def request_base_url(request: Request) -> str:
    """Origin the short URL should be built on for this request."""
    return build_base_url(
        headers=dict(request.headers),
        fallback_base_url=request.app.state.config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Store a URL and return its short form. Every call creates a new link.",
)
def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    shortener = request.app.state.shortener

    try:
        link = shortener.create_link(body.url)
    except InvalidUrlError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"URL is invalid: {e}",
        )
    except StoreError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )

    short_url = build_short_url(
        chunk=link.chunk,
        base_url=request_base_url(request),
        path_prefix=shortener.path_prefix,
    )

    return ShortenResponse(
        id=link.id,
        chunk=link.chunk,
        short_url=short_url,
        url=link.url,
        created_at=link.created_at,
    )


@router.get(
    "/links/{chunk}",
    response_model=LinkInfoResponse,
    responses={
        404: {"model": ErrorResponse, "description": "No link for this chunk"},
    },
    summary="Get link information",
)
def get_link_info(request: Request, chunk: str):
    """Get information about a short link."""
    redirector = request.app.state.redirector

    link = redirector.lookup(chunk)

    if link is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No link for '{chunk}'",
        )

    return LinkInfoResponse(**link.to_dict())


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
)
def get_statistics(request: Request):
    """Get service statistics."""
    store = request.app.state.store

    return StatisticsResponse(total_links=store.count(), database="sqlite")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    healthy = request.app.state.store.health_check()

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        database="healthy" if healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
