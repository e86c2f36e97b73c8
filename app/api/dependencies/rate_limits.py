from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded


def forwarded_client_key(request: Request) -> str:
    """Rate limit key: the original client behind the load balancer.

    Falls back to the socket peer address when no X-Forwarded-For is present.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client = forwarded_for.split(",")[0].strip()
        if client:
            return client
    return get_remote_address(request)


limiter = Limiter(
    key_func=forwarded_client_key,
)


async def rate_limit_handler(_request: Request, exc: Exception):
    """Return a 429 with the same JSON error shape as the webhook endpoint."""
    if isinstance(exc, RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"error": "Rate limit exceeded"},
        )


def setup_rate_limiter(app: FastAPI):
    """
    Setup rate limiting for the FastAPI application.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


def get_limiter():
    """
    Returns the limiter instance.
    """
    return limiter
