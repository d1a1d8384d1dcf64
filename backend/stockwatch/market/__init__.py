"""Market data subsystem for StockWatch.

Public API:
    PriceQuote          - Immutable quote dataclass
    PriceCache          - In-memory latest-quote store
    RandomWalkSimulator - Synthetic price generator
    SUPPORTED_TICKERS   - The closed ticker set
"""

from .cache import PriceCache
from .models import PriceQuote
from .simulator import RandomWalkSimulator
from .tickers import SUPPORTED_TICKERS, normalize_ticker

__all__ = [
    "PriceQuote",
    "PriceCache",
    "RandomWalkSimulator",
    "SUPPORTED_TICKERS",
    "normalize_ticker",
]
