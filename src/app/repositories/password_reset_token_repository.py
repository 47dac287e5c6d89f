from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def supersede_active_for_user(self, user_id: UUID) -> int:
        """Mark every issued token of a user as superseded. Returns count."""
        pass

    @abstractmethod
    async def mark_consumed(self, token_id: UUID, now: datetime) -> bool:
        """
        Atomically consume an issued, unexpired token.

        Returns True only for the caller whose conditional update matched the
        row; any later or concurrent caller gets False.
        """
        pass

    @abstractmethod
    async def delete_inactive(self, now: datetime) -> int:
        """Delete expired, consumed and superseded tokens. Returns count."""
        pass
