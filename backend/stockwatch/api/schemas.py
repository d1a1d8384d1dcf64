"""Request bodies for the HTTP endpoints.

Fields are optional at the schema level so a missing value reaches the store
and comes back as a ``400 {error}`` rather than FastAPI's default 422.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    email: str | None = None


class SubscriptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
    ticker: str | None = None
