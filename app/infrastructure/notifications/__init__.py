"""Push notification delivery infrastructure.

Exports:
    dispatch: Concurrent fan-out of one notification to many tokens
    FcmChannel: Firebase Cloud Messaging HTTP v1 send function
    ServiceAccountCredentialProvider: Service account → access token
    DeliveryOutcome / DeliverySummary: Fan-out results
    PushDeliveryError / CredentialError / DeliveryFailure: Error types
"""

from infrastructure.notifications.channels.fcm import FcmChannel
from infrastructure.notifications.credentials import ServiceAccountCredentialProvider
from infrastructure.notifications.dispatcher import dispatch
from infrastructure.notifications.exceptions import (
    CredentialError,
    DeliveryFailure,
    PushDeliveryError,
)
from infrastructure.notifications.models import DeliveryOutcome, DeliverySummary

__all__ = [
    "dispatch",
    "FcmChannel",
    "ServiceAccountCredentialProvider",
    "DeliveryOutcome",
    "DeliverySummary",
    "PushDeliveryError",
    "CredentialError",
    "DeliveryFailure",
]
