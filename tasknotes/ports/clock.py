from typing import Protocol
from datetime import datetime

class Clock(Protocol):
    """Źródło czasu dla `created_at`. Zwraca czas w strefie UTC (aware)."""
    def now(self) -> datetime:
        ...
