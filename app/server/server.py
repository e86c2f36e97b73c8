from core.config import settings
from core.logging import get_module_logger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter, get_limiter

logger = get_module_logger()


def create_app() -> FastAPI:
    """Build the webhook application with rate limiting, CORS and all routes."""
    app = FastAPI(title="Match Notifications", version=settings.GIT_SHA)
    setup_rate_limiter(app)

    # Webhooks are server to server, so production accepts no browser origins
    allow_origins = (
        []
        if settings.is_production
        else [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.include_router(api_router)
    logger.debug("server_app_created", routes=len(app.routes))
    return app


handler = create_app()
limiter = get_limiter()
