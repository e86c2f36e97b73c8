"""Service account credential provider for FCM.

Exchanges a Google service account key for a short-lived OAuth2 bearer token
that authorizes FCM HTTP v1 sends.
"""

from typing import Any, Dict, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from core.logging import get_module_logger
from infrastructure.notifications.exceptions import CredentialError

logger = get_module_logger()

DEFAULT_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


def normalize_service_account_info(info: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of the key with escaped newlines in private_key restored.

    Keys stored in environment variables often carry literal ``\\n`` sequences
    instead of line breaks, which the PEM parser rejects.

    Raises:
        CredentialError: if private_key is missing.
    """
    private_key = info.get("private_key")
    if not private_key:
        raise CredentialError("FCM_SERVICE_ACCOUNT private_key is missing")
    normalized = dict(info)
    normalized["private_key"] = private_key.replace("\\n", "\n")
    return normalized


class ServiceAccountCredentialProvider:
    """Produces FCM access tokens from a service account key.

    Args:
        service_account_info: Parsed service account JSON.
        scopes: OAuth2 scopes to request. Defaults to cloud-platform.
        project_id: Overrides the project id read from the service account.
    """

    def __init__(
        self,
        service_account_info: Dict[str, Any],
        scopes: Optional[List[str]] = None,
        project_id: Optional[str] = None,
    ):
        self._info = service_account_info or {}
        self._scopes = scopes or DEFAULT_SCOPES
        self._project_id = project_id

    @property
    def project_id(self) -> Optional[str]:
        return self._project_id or self._info.get("project_id")

    def get_access_token(self) -> str:
        """Exchange the service account key for a bearer token.

        Returns:
            The access token string.

        Raises:
            CredentialError: if the key is missing, malformed, or the token
                exchange fails.
        """
        info = normalize_service_account_info(self._info)
        try:
            credentials = service_account.Credentials.from_service_account_info(
                info, scopes=self._scopes
            )
            credentials.refresh(Request())
        except (ValueError, GoogleAuthError) as e:
            logger.error(
                "fcm_access_token_failed",
                client_email=info.get("client_email"),
                error=str(e),
            )
            raise CredentialError(f"Failed to obtain FCM access token: {e}") from e

        if not credentials.token:
            raise CredentialError("Failed to obtain FCM access token: empty token")

        logger.info("fcm_access_token_obtained", client_email=info.get("client_email"))
        return credentials.token
