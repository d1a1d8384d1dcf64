"""User records held by the subscription store."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class User:
    """A dashboard viewer identified by email.

    ``subscriptions`` keeps first-subscribed order and never holds duplicates.
    """

    id: str
    email: str
    subscriptions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "subscriptions": list(self.subscriptions),
        }

    def to_snapshot(self) -> dict:
        """The per-user view pushed in ``userUpdate`` messages."""
        return {
            "email": self.email,
            "subscriptions": list(self.subscriptions),
        }
