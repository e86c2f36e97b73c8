"""Test fixtures for push notification infrastructure tests."""

import json
from unittest.mock import patch

import pytest
import requests


@pytest.fixture
def fcm_response():
    """Factory for FCM HTTP responses built on a real requests.Response."""

    def _factory(status_code=200, json_data=None, headers=None, text=""):
        response = requests.Response()
        response.status_code = status_code
        response.encoding = "utf-8"
        response.headers.update(headers or {})
        if json_data is not None:
            text = json.dumps(json_data)
        response._content = text.encode("utf-8")  # pylint: disable=protected-access
        return response

    return _factory


@pytest.fixture
def mock_post():
    with patch("infrastructure.notifications.channels.fcm.requests.post") as post:
        yield post
