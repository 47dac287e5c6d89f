"""
Confirm Password Reset Use Case

Handles password reset confirmation with secure token validation.
"""

import hashlib
import logging

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PasswordResetTokenStatus, UserStatus
from .dtos import ConfirmPasswordResetResponse

logger = logging.getLogger(__name__)


def _invalid_token() -> Result[ConfirmPasswordResetResponse]:
    # Unknown, expired, consumed and superseded tokens look the same to callers
    return Return.err(Error("INVALID_TOKEN", "Invalid or expired password reset token"))


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Token must be issued (not consumed or superseded) and not expired
    - Token is checked before the password, so a bad token is always
      reported as INVALID_TOKEN
    - New password must satisfy the password policy (WEAK_PASSWORD),
      checked before anything is mutated; the token stays usable
    - Token consumption is a compare-and-set: of two racing confirmations
      exactly one succeeds
    - Password is hashed with bcrypt (cost factor 12)
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, password_policy: PasswordPolicy):
        self.uow = uow
        self.clock = clock
        self.password_policy = password_policy

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_TOKEN: Token unknown, expired, consumed or superseded
            - WEAK_PASSWORD: Password does not satisfy the password policy
            - USER_NOT_FOUND: Token owner no longer exists
        """
        async with self.uow:
            token_hash = hashlib.sha256(token.encode()).hexdigest()
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(token_hash)

            if reset_token is None:
                logger.info("Password reset rejected: unknown token")
                return _invalid_token()

            now = self.clock.now()

            if reset_token.status != PasswordResetTokenStatus.issued:
                logger.info(
                    f"Password reset rejected: token {reset_token.id} is {reset_token.status.value}"
                )
                return _invalid_token()

            if reset_token.is_expired(now):
                logger.info(f"Password reset rejected: token {reset_token.id} expired")
                return _invalid_token()

            password_validation = self.password_policy.validate(new_password)
            if password_validation.is_err():
                return Return.err(password_validation.error)

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.status != UserStatus.active:
                logger.info(f"Password reset rejected: user {user.id} is disabled")
                return _invalid_token()

            token_id = reset_token.id
            consumed = await self.uow.password_reset_tokens.mark_consumed(token_id, now)
            if not consumed:
                logger.warning(f"Password reset rejected: token {token_id} consumed concurrently")
                return _invalid_token()

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))

            user.password_hash = password_hash.decode()
            user.updated_at = now
            await self.uow.users.update(user)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_confirmed",
                event_metadata={"token_id": str(token_id)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Password reset completed for user {user.id}")
            return Return.ok(
                ConfirmPasswordResetResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
