"""The closed set of tickers tracked by the simulator."""

SUPPORTED_TICKERS: tuple[str, ...] = ("GOOG", "TSLA", "AMZN", "META", "NVDA")

# Starting prices are drawn from [SEED_PRICE_MIN, SEED_PRICE_MIN + SEED_PRICE_SPAN)
SEED_PRICE_MIN = 100.0
SEED_PRICE_SPAN = 1000.0

# Largest absolute move per tick, and the lowest price a ticker may reach
DEFAULT_MAX_MOVE = 5.0
PRICE_FLOOR = 1.0


def normalize_ticker(ticker: str) -> str:
    """Canonical form of a ticker: upper-case, no surrounding whitespace."""
    return ticker.upper().strip()
