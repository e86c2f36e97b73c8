"""Operation result types and status enums.

Standardized result types for calls to external services, including status
enums, the result dataclass, and classifiers for failed HTTP calls.
"""

from infrastructure.operations.classifiers import (
    classify_http_response,
    classify_request_exception,
    extract_provider_error_code,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_response",
    "classify_request_exception",
    "extract_provider_error_code",
]
