"""Push delivery channels."""

from infrastructure.notifications.channels.fcm import FcmChannel

__all__ = ["FcmChannel"]
