"""Match notifications configuration settings."""

from typing import Any, List, Optional
import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class SupabaseSettings(BaseSettings):
    """Supabase (PostgREST) configuration settings."""

    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_TIMEOUT_SECONDS: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class FcmSettings(BaseSettings):
    """Firebase Cloud Messaging configuration settings.

    FCM_SERVICE_ACCOUNT holds the full service account JSON key. It is parsed
    into a dictionary on load; a value that is not valid JSON is treated as
    missing so the credential provider can report it as a credential error.
    """

    FCM_SERVICE_ACCOUNT: Any = Field(default_factory=dict)
    FCM_PROJECT_ID: Optional[str] = None
    FCM_SCOPES: List[str] = ["https://www.googleapis.com/auth/cloud-platform"]
    FCM_TIMEOUT_SECONDS: float = 10.0

    @field_validator("FCM_SERVICE_ACCOUNT", mode="before")
    @classmethod
    def _parse_service_account(cls, v: Optional[Any]) -> Any:
        if v is None or v == "":
            return {}
        if isinstance(v, dict):
            return v
        if isinstance(v, (str, bytes)):
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError as e:
                logger.warning("fcm_service_account_parse_error", error=str(e))
                return {}
            if isinstance(parsed, dict):
                return parsed
            logger.warning(
                "fcm_service_account_invalid_type", type=type(parsed).__name__
            )
            return {}
        return v

    @property
    def project_id(self) -> Optional[str]:
        """Project to deliver through, preferring the explicit override."""
        return self.FCM_PROJECT_ID or self.FCM_SERVICE_ACCOUNT.get("project_id")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class NotificationSettings(BaseSettings):
    """Notification content settings."""

    DISPLAY_TIMEZONE: str = "UTC"

    @field_validator("DISPLAY_TIMEZONE")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class ServerSettings(BaseSettings):
    """Server configuration settings."""

    WEBHOOK_SECRET: Optional[str] = None
    PUSH_NOTIFICATIONS_RATE_LIMIT: str = "300/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Match notifications configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    supabase: SupabaseSettings
    fcm: FcmSettings
    notifications: NotificationSettings
    server: ServerSettings

    @property
    def is_production(self) -> bool:
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "supabase": SupabaseSettings,
            "fcm": FcmSettings,
            "notifications": NotificationSettings,
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
