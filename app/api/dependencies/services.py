from functools import lru_cache

from core.config import settings
from modules.match_notifications.service import (
    MatchNotificationService,
    build_notification_service,
)


@lru_cache(maxsize=1)
def get_notification_service() -> MatchNotificationService:
    """Build the notification service once per process from settings."""
    return build_notification_service(settings)
