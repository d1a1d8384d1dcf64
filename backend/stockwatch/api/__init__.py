"""HTTP API for logins and subscriptions."""

from .errors import install_error_handlers
from .routes import create_api_router

__all__ = ["create_api_router", "install_error_handlers"]
