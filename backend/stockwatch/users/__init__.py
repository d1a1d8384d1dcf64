"""User identity and subscription tracking."""

from .models import User
from .store import SubscriptionStore

__all__ = ["User", "SubscriptionStore"]
