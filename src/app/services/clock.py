from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Time source for token issuance and expiry checks"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as a naive UTC datetime (matches stored columns)"""
        pass
