"""Services for the pom CLI - config, side-effect dispatch, notifications."""

from .config_service import ConfigService, get_config_service
from .dispatcher import IntentDispatcher
from .notification_service import NotificationError, Notifier

__all__ = [
    "ConfigService",
    "get_config_service",
    "IntentDispatcher",
    "NotificationError",
    "Notifier",
]
