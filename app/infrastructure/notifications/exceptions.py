"""Push delivery exceptions."""

from typing import Any, Optional


class PushDeliveryError(Exception):
    """Base exception for push delivery failures."""


class CredentialError(PushDeliveryError):
    """The platform credential could not be built or exchanged for a token.

    Fatal for the whole invocation: nothing can be sent without a token.
    """


class DeliveryFailure(PushDeliveryError):
    """A single token could not be delivered to.

    Only fails the token it was raised for; the dispatcher counts it and
    carries on with the rest of the fan-out.
    """

    def __init__(
        self,
        token: str,
        message: str,
        error_code: Optional[str] = None,
        detail: Optional[Any] = None,
    ):
        super().__init__(message)
        self.token = token
        self.error_code = error_code
        self.detail = detail
