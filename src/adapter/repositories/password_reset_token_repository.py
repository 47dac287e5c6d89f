from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken, PasswordResetTokenStatus


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def supersede_active_for_user(self, user_id: UUID) -> int:
        """Mark every issued token of a user as superseded"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.status == PasswordResetTokenStatus.issued,
            )
            .values(status=PasswordResetTokenStatus.superseded)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def mark_consumed(self, token_id: UUID, now: datetime) -> bool:
        """
        Compare-and-set consumption.

        The status and expiry checks are part of the UPDATE itself, so two
        transactions racing on the same token cannot both match the row.
        """
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.status == PasswordResetTokenStatus.issued,
                PasswordResetToken.expires_at > now,
            )
            .values(status=PasswordResetTokenStatus.consumed, consumed_at=now)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_inactive(self, now: datetime) -> int:
        """Delete expired, consumed and superseded tokens"""
        stmt = (
            delete(PasswordResetToken)
            .where(
                or_(
                    PasswordResetToken.status != PasswordResetTokenStatus.issued,
                    PasswordResetToken.expires_at <= now,
                )
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
