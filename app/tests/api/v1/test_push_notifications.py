import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from api.dependencies.services import get_notification_service
from api.v1.routes import push_notifications
from models.matches import InvocationResult
from utils.tests import create_test_app


@pytest.fixture
def service_mock():
    service = MagicMock()
    service.handle_event.return_value = InvocationResult.delivered(2)
    return service


@pytest.fixture
def test_client(service_mock):
    test_app = create_test_app(
        push_notifications.router,
        dependency_overrides={get_notification_service: lambda: service_mock},
    )
    return TestClient(test_app)


def test_push_notification_dispatched(test_client, service_mock):
    payload = {"type": "reminder", "match_id": "m1"}

    response = test_client.post("/push-notifications", json=payload)

    assert response.status_code == 200
    assert response.json() == {"success": True, "sent": 2}
    service_mock.handle_event.assert_called_once_with(payload)


def test_push_notification_accepts_json_string_body(test_client, service_mock):
    payload = {"type": "reminder", "match_id": "m1"}

    response = test_client.post("/push-notifications", json=json.dumps(payload))

    assert response.status_code == 200
    service_mock.handle_event.assert_called_once_with(payload)


def test_push_notification_informational_result(test_client, service_mock):
    service_mock.handle_event.return_value = InvocationResult.informational(
        "No subscribers found"
    )

    response = test_client.post("/push-notifications", json={"type": "reminder"})

    assert response.status_code == 200
    assert response.json() == {"message": "No subscribers found"}


@pytest.mark.parametrize(
    "result,status_code",
    [
        (InvocationResult.failure("Reminder payload must not carry a table", 400), 400),
        (InvocationResult.failure("Match not found"), 500),
    ],
)
def test_push_notification_failure_status(
    test_client, service_mock, result, status_code
):
    service_mock.handle_event.return_value = result

    response = test_client.post("/push-notifications", json={"type": "reminder"})

    assert response.status_code == status_code
    assert response.json() == {"error": result.error}


def test_push_notification_malformed_json(test_client, service_mock):
    response = test_client.post(
        "/push-notifications",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    service_mock.handle_event.assert_not_called()


@patch("core.config.settings.server.WEBHOOK_SECRET", "s3cret")
def test_push_notification_requires_secret_when_configured(test_client, service_mock):
    response = test_client.post("/push-notifications", json={"type": "reminder"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    service_mock.handle_event.assert_not_called()


@patch("core.config.settings.server.WEBHOOK_SECRET", "s3cret")
def test_push_notification_rejects_wrong_secret(test_client, service_mock):
    response = test_client.post(
        "/push-notifications",
        json={"type": "reminder"},
        headers={"Authorization": "Bearer nope"},
    )

    assert response.status_code == 401


@patch("core.config.settings.server.WEBHOOK_SECRET", "s3cret")
def test_push_notification_accepts_matching_secret(test_client, service_mock):
    response = test_client.post(
        "/push-notifications",
        json={"type": "reminder", "match_id": "m1"},
        headers={"Authorization": "Bearer s3cret"},
    )

    assert response.status_code == 200
    service_mock.handle_event.assert_called_once()
