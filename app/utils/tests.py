from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI


def create_test_app(
    routers,
    middlewares=None,
    dependency_overrides: Optional[Dict[Callable[..., Any], Callable[..., Any]]] = None,
) -> FastAPI:
    """
    Create a FastAPI test application with the given routers.

    Args:
        routers: A router or list of routers to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.
        dependency_overrides: Optional mapping of dependency to replacement,
            e.g. the notification service factory to a mock.

    Returns:
        FastAPI: A configured FastAPI application with rate limiting set up.

    Example:
        app = create_test_app(
            push_notifications.router,
            dependency_overrides={get_notification_service: lambda: service_mock},
        )
    """
    app = FastAPI()

    from api.dependencies.rate_limits import setup_rate_limiter

    setup_rate_limiter(app)

    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    if dependency_overrides:
        app.dependency_overrides.update(dependency_overrides)

    return app
