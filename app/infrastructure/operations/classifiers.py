"""Error classifiers for HTTP provider calls.

Converts failed ``requests`` responses and transport exceptions into
standardized OperationResult objects so channels report failures the same
way regardless of provider.

Usage:
    from infrastructure.operations.classifiers import (
        classify_http_response,
        classify_request_exception,
    )

    try:
        response = requests.post(url, json=payload, timeout=10)
    except requests.RequestException as exc:
        return classify_request_exception(exc)
    if not 200 <= response.status_code < 300:
        return classify_http_response(response)
"""

from typing import Any, Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER_SECONDS = 60


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_provider_error_code(body: Any) -> Optional[str]:
    """Extract the provider error code from a Google-style error body.

    FCM reports the specific reason (e.g. ``UNREGISTERED``) under
    ``error.details[].errorCode`` and the generic one under ``error.status``.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if not isinstance(error, dict):
        return None
    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("errorCode"):
            return detail["errorCode"]
    return error.get("status")


def _retry_after(response: requests.Response) -> int:
    header_value = response.headers.get("Retry-After")
    if header_value:
        try:
            return int(header_value)
        except (ValueError, TypeError):
            pass
    return DEFAULT_RETRY_AFTER_SECONDS


def classify_http_response(response: requests.Response) -> OperationResult:
    """Classify a non-2xx HTTP response into OperationResult.

    Status Code Mapping:
    - 429: Rate limiting → TRANSIENT_ERROR with retry_after
    - 401/403: Credential rejected → UNAUTHORIZED
    - 404: Target not found → NOT_FOUND
    - 5xx: Server error → TRANSIENT_ERROR with retry_after
    - Other: → PERMANENT_ERROR

    The decoded response body is kept in ``data`` for logging.
    """
    status_code = response.status_code
    body = _response_body(response)
    provider_code = extract_provider_error_code(body)

    if status_code == 429:
        return OperationResult.transient_error(
            "Provider rate limited",
            error_code=provider_code or "RATE_LIMITED",
            retry_after=_retry_after(response),
            data=body,
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"Provider rejected credentials (HTTP {status_code})",
            error_code=provider_code or "UNAUTHORIZED",
            data=body,
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            "Provider target not found",
            error_code=provider_code or "NOT_FOUND",
            data=body,
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"Provider server error (HTTP {status_code})",
            error_code=provider_code or "SERVER_ERROR",
            retry_after=_retry_after(response),
            data=body,
        )

    return OperationResult.permanent_error(
        f"Provider request failed (HTTP {status_code})",
        error_code=provider_code or f"HTTP_{status_code}",
        data=body,
    )


def classify_request_exception(exc: Exception) -> OperationResult:
    """Classify a transport-level failure into OperationResult.

    Timeouts and connection errors are treated as transient.
    """
    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"Request timed out: {exc}", error_code="TIMEOUT"
        )
    return OperationResult.transient_error(
        f"Connection error: {type(exc).__name__}: {exc}",
        error_code="CONNECTION_ERROR",
    )
