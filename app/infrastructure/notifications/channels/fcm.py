"""Push channel implementation using Firebase Cloud Messaging HTTP v1."""

from typing import Any, Dict

import requests

from core.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_response,
    classify_request_exception,
)

logger = get_module_logger()

FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
ANDROID_CHANNEL_ID = "high_importance_channel"
MESSAGE_TYPE = "update"


class FcmChannel:
    """Sends one push message per call through FCM.

    Each send is independent: it makes its own HTTP request with no state
    shared with concurrent sends, and a failure is returned as an
    OperationResult and never raised.

    Args:
        project_id: Firebase project the messages are sent through.
        timeout_seconds: Per-request timeout.
    """

    def __init__(self, project_id: str, timeout_seconds: float = 10.0):
        self.project_id = project_id
        self.timeout_seconds = timeout_seconds

    @property
    def channel_name(self) -> str:
        return "fcm"

    @property
    def send_url(self) -> str:
        return FCM_SEND_URL.format(project_id=self.project_id)

    @staticmethod
    def build_message(
        token: str, title: str, body: str, match_id: Any
    ) -> Dict[str, Any]:
        """Build the FCM v1 message for one token.

        Android messages go out at high priority on the high importance
        channel; iOS messages play the default sound and set the badge to 1.
        """
        return {
            "message": {
                "token": token,
                "notification": {"title": title, "body": body},
                "data": {"matchId": str(match_id), "type": MESSAGE_TYPE},
                "android": {
                    "priority": "high",
                    "notification": {
                        "sound": "default",
                        "channel_id": ANDROID_CHANNEL_ID,
                    },
                },
                "apns": {"payload": {"aps": {"sound": "default", "badge": 1}}},
            }
        }

    def send(
        self,
        token: str,
        title: str,
        body: str,
        match_id: Any,
        access_token: str,
    ) -> OperationResult:
        """Send a notification to a single device token.

        Args:
            token: FCM registration token.
            title: Notification title.
            body: Notification body.
            match_id: Match the notification is about, sent as data.
            access_token: OAuth2 bearer token for FCM.

        Returns:
            OperationResult with the FCM message name on success, or the
            classified failure with the response body in ``data``.
        """
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        payload = self.build_message(token, title, body, match_id)

        try:
            response = requests.post(
                self.send_url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            return classify_request_exception(e)

        if not 200 <= response.status_code < 300:
            return classify_http_response(response)

        try:
            message_name = response.json().get("name")
        except ValueError:
            message_name = None
        logger.debug("fcm_message_sent", token_prefix=token[:10], name=message_name)
        return OperationResult.success(
            data={"name": message_name}, message="Sent FCM message"
        )
