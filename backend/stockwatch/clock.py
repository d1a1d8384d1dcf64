"""Wall-clock helpers. All wire timestamps are Unix milliseconds."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Current wall-clock time as integer Unix milliseconds."""
    return int(time.time() * 1000)
