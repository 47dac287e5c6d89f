from datetime import UTC, datetime

from src.app.services.clock import Clock


class SystemClock(Clock):
    """Wall-clock UTC time, naive to match the DateTime columns"""

    def now(self) -> datetime:
        return datetime.now(UTC).replace(tzinfo=None)
