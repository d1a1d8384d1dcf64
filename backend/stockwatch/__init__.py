"""StockWatch: simulated real-time stock dashboard server."""

__version__ = "0.1.0"
