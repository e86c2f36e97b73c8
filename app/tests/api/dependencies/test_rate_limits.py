import json
from unittest.mock import Mock

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from api.dependencies import rate_limits


@pytest.mark.asyncio
async def test_rate_limit_handler():
    mock_request = Mock(spec=Request)
    mock_exception = Mock(spec=RateLimitExceeded)

    response = await rate_limits.rate_limit_handler(mock_request, mock_exception)

    assert isinstance(response, JSONResponse)
    assert response.status_code == 429
    assert json.loads(response.body.decode()) == {"error": "Rate limit exceeded"}


def test_setup_rate_limiter():
    app = FastAPI()

    rate_limits.setup_rate_limiter(app)

    assert app.state.limiter is rate_limits.get_limiter()
    assert RateLimitExceeded in app.exception_handlers


def test_forwarded_client_key_uses_first_forwarded_address():
    mock_request = Mock(spec=Request)
    mock_request.headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

    assert rate_limits.forwarded_client_key(mock_request) == "203.0.113.7"


def test_forwarded_client_key_falls_back_to_peer_address():
    mock_request = Mock(spec=Request)
    mock_request.headers = {}
    mock_request.client.host = "192.168.1.1"

    assert rate_limits.forwarded_client_key(mock_request) == "192.168.1.1"
