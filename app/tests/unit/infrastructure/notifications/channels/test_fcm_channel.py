"""Unit tests for the FCM push channel."""

import pytest
import requests

from infrastructure.notifications.channels.fcm import FcmChannel
from infrastructure.operations import OperationStatus


@pytest.fixture
def channel():
    return FcmChannel(project_id="match-project", timeout_seconds=7.0)


@pytest.mark.unit
class TestBuildMessage:
    """Tests for FcmChannel.build_message()."""

    def test_message_shape(self):
        message = FcmChannel.build_message(
            "device-token", "KICK OFF! ⚔️", "Lions vs Tigers has started!", "m1"
        )

        assert message == {
            "message": {
                "token": "device-token",
                "notification": {
                    "title": "KICK OFF! ⚔️",
                    "body": "Lions vs Tigers has started!",
                },
                "data": {"matchId": "m1", "type": "update"},
                "android": {
                    "priority": "high",
                    "notification": {
                        "sound": "default",
                        "channel_id": "high_importance_channel",
                    },
                },
                "apns": {"payload": {"aps": {"sound": "default", "badge": 1}}},
            }
        }

    def test_match_id_is_sent_as_string(self):
        message = FcmChannel.build_message("t", "title", "body", 42)

        assert message["message"]["data"]["matchId"] == "42"


@pytest.mark.unit
class TestSend:
    """Tests for FcmChannel.send()."""

    def test_success(self, channel, mock_post, fcm_response):
        mock_post.return_value = fcm_response(
            json_data={"name": "projects/match-project/messages/1"}
        )

        result = channel.send(
            token="device-token",
            title="title",
            body="body",
            match_id="m1",
            access_token="ya29.token",
        )

        assert result.is_success
        assert result.data == {"name": "projects/match-project/messages/1"}
        args, kwargs = mock_post.call_args
        assert args[0] == (
            "https://fcm.googleapis.com/v1/projects/match-project/messages:send"
        )
        assert kwargs["headers"]["Authorization"] == "Bearer ya29.token"
        assert kwargs["json"]["message"]["token"] == "device-token"
        assert kwargs["timeout"] == 7.0

    def test_unregistered_token(self, channel, mock_post, fcm_response):
        body = {
            "error": {
                "code": 404,
                "status": "NOT_FOUND",
                "details": [
                    {
                        "@type": "type.googleapis.com/google.firebase.fcm.v1.FcmError",
                        "errorCode": "UNREGISTERED",
                    }
                ],
            }
        }
        mock_post.return_value = fcm_response(status_code=404, json_data=body)

        result = channel.send("t", "title", "body", "m1", "ya29.token")

        assert not result.is_success
        assert result.status == OperationStatus.NOT_FOUND
        assert result.error_code == "UNREGISTERED"
        assert result.data == body

    def test_invalid_argument(self, channel, mock_post, fcm_response):
        mock_post.return_value = fcm_response(
            status_code=400,
            json_data={"error": {"code": 400, "status": "INVALID_ARGUMENT"}},
        )

        result = channel.send("t", "title", "body", "m1", "ya29.token")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "INVALID_ARGUMENT"

    def test_transport_failure_is_returned_not_raised(self, channel, mock_post):
        mock_post.side_effect = requests.ConnectionError("reset")

        result = channel.send("t", "title", "body", "m1", "ya29.token")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "CONNECTION_ERROR"

    def test_success_without_json_body(self, channel, mock_post, fcm_response):
        mock_post.return_value = fcm_response(status_code=200)

        result = channel.send("t", "title", "body", "m1", "ya29.token")

        assert result.is_success
        assert result.data == {"name": None}

    def test_redirect_is_not_a_delivery(self, channel, mock_post, fcm_response):
        mock_post.return_value = fcm_response(status_code=304)

        result = channel.send("t", "title", "body", "m1", "ya29.token")

        assert not result.is_success
        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "HTTP_304"

    def test_each_send_makes_its_own_request(
        self, channel, mock_post, fcm_response
    ):
        mock_post.return_value = fcm_response(json_data={"name": "n"})

        channel.send("a", "title", "body", "m1", "ya29.token")
        channel.send("b", "title", "body", "m1", "ya29.token")

        assert mock_post.call_count == 2
        sent = [c.kwargs["json"]["message"]["token"] for c in mock_post.call_args_list]
        assert sent == ["a", "b"]
