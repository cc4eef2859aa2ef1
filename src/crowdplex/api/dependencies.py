"""FastAPI dependencies for the shared client, cache and rate limiter."""

from fastapi import HTTPException, Request, Response

from crowdplex.services.cache import TTLCache
from crowdplex.services.cineplex_client import CineplexClient
from crowdplex.services.rate_limiter import RateLimiter


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_cineplex_client(request: Request) -> CineplexClient:
    return request.app.state.cineplex_client


async def enforce_rate_limit(request: Request, response: Response) -> None:
    """
    Reject the request with 429 when its client address is over the limit.

    Usage:
        @router.get("/endpoint", dependencies=[Depends(enforce_rate_limit)])
    """
    limiter: RateLimiter = request.app.state.rate_limiter
    client_ip = request.client.host if request.client else "unknown"
    decision = limiter.check(client_ip)

    if not decision.allowed:
        raise HTTPException(
            status_code=429,
            detail={
                "error": "Too many requests",
                "message": (
                    f"Rate limit exceeded. Maximum {limiter.max_requests} requests "
                    f"per {limiter.window_seconds:g} seconds."
                ),
                "retryAfter": decision.reset_seconds,
            },
            headers={
                "X-RateLimit-Limit": str(decision.limit),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(decision.reset_seconds),
            },
        )

    response.headers["X-RateLimit-Limit"] = str(decision.limit)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
