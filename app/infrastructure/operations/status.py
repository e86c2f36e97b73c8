"""Operation status enumeration.

High-level outcome of a call to an external service, used to tell apart
failures worth retrying from failures that will keep happening.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Call completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (invalid request or payload)
        UNAUTHORIZED: Credential rejected or missing permissions
        NOT_FOUND: Target does not exist (e.g. an unregistered device token)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
