"""FastAPI web server for Code360 profile statistics."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Protocol

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import BaseModel

from code360stats import __version__
from code360stats.cache import CacheProvider, MemoryCache, SQLiteCache, make_cache_key
from code360stats.config import CacheBackend, ScraperConfig
from code360stats.core.formatter import format_response
from code360stats.core.orchestrator import ProfileFetcher
from code360stats.exceptions import (
    CacheError,
    InvalidInputError,
    NavigationTimeoutError,
    ProfileNotFoundError,
    RateLimitExceededError,
)
from code360stats.logging import configure_logging, get_logger
from code360stats.models import NormalizedProfileStats, PublicProfileResponse
from code360stats.ratelimit import RATE_LIMIT_MESSAGE, RateLimiter

PLATFORM = "Code360"

log = get_logger("api")


class StatsFetcher(Protocol):
    """Anything that can produce normalized stats for a username."""

    async def fetch(self, username: str) -> NormalizedProfileStats: ...


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    platform: str
    timestamp: str


class CacheStatsResponse(BaseModel):
    """Cache size and keys."""

    size: int
    entries: list[str]


class MessageResponse(BaseModel):
    message: str


def build_cache(config: ScraperConfig) -> CacheProvider | None:
    """Create the cache provider selected by configuration."""
    if config.cache_backend == CacheBackend.MEMORY:
        return MemoryCache(config.cache_ttl_seconds)
    if config.cache_backend == CacheBackend.SQLITE:
        return SQLiteCache(config.sqlite_path, config.cache_ttl_seconds)
    return None


def error_response(exc: Exception) -> JSONResponse:
    """Translate an internal error into its HTTP response."""
    if isinstance(exc, InvalidInputError):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, (NavigationTimeoutError, PlaywrightTimeoutError, TimeoutError)):
        return JSONResponse(
            status_code=408,
            content={"error": "Request timeout - Code360 profile took too long to load or element not found."},
        )
    if isinstance(exc, ProfileNotFoundError):
        return JSONResponse(status_code=404, content={"error": "Code360 profile not found"})
    return JSONResponse(
        status_code=500,
        content={
            "status": "error",
            "message": "Failed to scrape Code360 profile",
            "details": str(exc),
        },
    )


async def enforce_rate_limit(request: Request) -> None:
    """Reject the request once the client exhausts its quota."""
    limiter: RateLimiter = request.app.state.limiter
    client_id = request.client.host if request.client else "unknown"
    if not await limiter.hit(client_id):
        log.warning("rate_limited", client=client_id, path=request.url.path)
        raise RateLimitExceededError(RATE_LIMIT_MESSAGE)


router = APIRouter(prefix="/api", dependencies=[Depends(enforce_rate_limit)])


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health status."""
    return HealthResponse(
        status="OK",
        platform=PLATFORM,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/profile/", include_in_schema=False)
async def get_profile_without_username():
    """Empty username path segment."""
    return error_response(InvalidInputError("Username is required"))


@router.get("/profile/{username}", response_model=PublicProfileResponse, tags=["Profiles"])
@router.get("/code360/{username}", response_model=PublicProfileResponse, tags=["Profiles"])
async def get_profile(
    request: Request,
    username: str,
    force_refresh: bool = Query(False, description="Skip cache lookup"),
):
    """
    Get Code360 statistics for a username.

    Served from cache when a fresh entry exists; otherwise the profile page
    is rendered and scraped, and the result is cached. An unreadable cache
    entry counts as a miss.
    """
    if not username.strip():
        return error_response(InvalidInputError("Username is required"))

    state = request.app.state
    cache: CacheProvider | None = state.cache
    key = make_cache_key(username)

    try:
        if cache and not force_refresh:
            try:
                entry = await cache.get(key)
            except CacheError as e:
                log.warning("cache_read_failed", username=username, key=key, error=str(e))
                entry = None
            if entry:
                log.info("cache_hit", username=username, key=key)
                return entry.response

        log.info("cache_miss", username=username, key=key, force_refresh=force_refresh)

        stats = await state.fetcher.fetch(username)
        response = format_response(stats, username)

        if cache:
            await cache.set(key, response, state.config.cache_ttl_seconds)
    except Exception as e:
        log.error("profile_request_failed", username=username, error=str(e), error_type=type(e).__name__)
        return error_response(e)

    return response


@router.post("/cache/clear", response_model=MessageResponse, tags=["Cache"])
async def clear_cache(request: Request):
    """Drop all cached profiles."""
    cache: CacheProvider | None = request.app.state.cache
    if cache:
        await cache.clear()
    log.info("cache_cleared")
    return MessageResponse(message="Cache cleared successfully")


@router.get("/cache/stats", response_model=CacheStatsResponse, tags=["Cache"])
async def cache_stats(request: Request):
    """List cached profile keys."""
    cache: CacheProvider | None = request.app.state.cache
    entries = await cache.keys() if cache else []
    return CacheStatsResponse(size=len(entries), entries=entries)


def create_app(
    config: ScraperConfig | None = None,
    fetcher: StatsFetcher | None = None,
    cache: CacheProvider | None = None,
    limiter: RateLimiter | None = None,
) -> FastAPI:
    """
    Build the API application.

    Services not passed in are created from configuration. All of them are
    held on ``app.state`` and the cache is closed on shutdown.

    Args:
        config: ScraperConfig instance, uses defaults if None
        fetcher: Stats fetcher, defaults to ProfileFetcher
        cache: Cache provider, defaults to the configured backend
        limiter: Rate limiter, defaults to the configured quota
    """
    config = config or ScraperConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage service lifecycle."""
        configure_logging(config)
        log.info("api_start", cache_backend=config.cache_backend.value, cache_ttl=config.cache_ttl_seconds)
        yield
        if app.state.cache:
            await app.state.cache.close()
        log.info("api_stop")

    app = FastAPI(
        title="code360stats API",
        description="Code360 profile statistics scraper API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.fetcher = fetcher or ProfileFetcher(config)
    app.state.cache = cache if cache is not None else build_cache(config)
    app.state.limiter = limiter or RateLimiter(
        config.rate_limit_requests,
        config.rate_limit_window_seconds,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RateLimitExceededError)
    async def rate_limit_handler(request: Request, exc: RateLimitExceededError):
        return JSONResponse(status_code=429, content={"error": str(exc)})

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
