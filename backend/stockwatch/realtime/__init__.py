"""Push channel: connection tracking, tick loop and broadcast."""

from .broadcast import Broadcaster
from .registry import ConnectionRegistry
from .stream import create_stream_router
from .ticker import TickLoop

__all__ = [
    "Broadcaster",
    "ConnectionRegistry",
    "TickLoop",
    "create_stream_router",
]
