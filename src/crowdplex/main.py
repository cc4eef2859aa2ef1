"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crowdplex.api.errors import register_exception_handlers
from crowdplex.api.routes import cineplex, health, rankings
from crowdplex.config import settings
from crowdplex.services.cache import TTLCache
from crowdplex.services.cineplex_client import CineplexClient
from crowdplex.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: shared cache, rate limiter and upstream client
    cache = TTLCache()
    rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window,
    )
    client = CineplexClient(cache=cache)

    app.state.cache = cache
    app.state.rate_limiter = rate_limiter
    app.state.cineplex_client = client

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        cache.evict_expired,
        trigger=IntervalTrigger(seconds=settings.cache_cleanup_interval),
        id="cache_cleanup",
        name="Evict expired cache entries",
        replace_existing=True,
    )
    scheduler.add_job(
        rate_limiter.prune,
        trigger=IntervalTrigger(minutes=1),
        id="rate_limit_cleanup",
        name="Drop idle rate-limit entries",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        f"Crowdplex ready: rate limit {settings.rate_limit_requests} requests/"
        f"{settings.rate_limit_window}s per IP, cache "
        f"{settings.theatre_cache_ttl}s (theatres), {settings.showtime_cache_ttl}s (showtimes), "
        f"{settings.seat_cache_ttl}s (seats)"
    )

    yield

    # Shutdown: stop the scheduler and release the upstream connection pool
    scheduler.shutdown(wait=False)
    await client.aclose()
    cache.clear()
    logger.info("Scheduler shut down")


# Create FastAPI app
app = FastAPI(
    title="Crowdplex API",
    description="Ranks the movies showing at nearby Cineplex theatres by how full they are",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:5174",
        settings.frontend_url,
    ],
    allow_origin_regex=r"https://.*\.vercel\.app",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(cineplex.router, prefix="/api", tags=["cineplex"])
app.include_router(rankings.router, prefix="/api", tags=["rankings"])


def run() -> None:
    """Start the API server with uvicorn."""
    import uvicorn

    uvicorn.run("crowdplex.main:app", host=settings.api_host, port=settings.api_port)
