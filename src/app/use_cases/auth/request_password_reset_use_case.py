"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.notification_dispatcher import INotificationDispatcher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PasswordResetToken, PasswordResetTokenStatus, UserStatus
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

SENT_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Email must be syntactically valid (VALIDATION_ERROR otherwise)
    - Generate cryptographically secure 32-byte token
    - Hash token with SHA-256 before storing
    - Token expires after token_ttl (1 hour by default)
    - Issuing a token supersedes every earlier issued token of the user
    - No email enumeration (same response for known/unknown emails)
    - Audit event created for security tracking
    - Plain token is dispatched out of band after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        clock: Clock,
        token_ttl: timedelta = timedelta(hours=1),
    ):
        self.uow = uow
        self.notifier = notifier
        self.clock = clock
        self.token_ttl = token_ttl

    def _validate_email(self, email: Optional[str]) -> Result[str]:
        if not email:
            return Return.err(Error("VALIDATION_ERROR", "Email is required"))

        try:
            validated = validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return Return.err(Error("VALIDATION_ERROR", "Email address is not valid"))

        return Return.ok(validated.normalized)

    async def execute(self, email: Optional[str]) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status, or Error

        Errors:
            - VALIDATION_ERROR: Email missing or malformed
            - NOTIFICATION_FAILED: Token stored but delivery failed

        Note:
            For security (no email enumeration), always returns success
            for well-formed emails even if the email doesn't exist.
            A token is only generated for an active account.
        """
        email_validation = self._validate_email(email)
        if email_validation.is_err():
            return Return.err(email_validation.error)
        email = email_validation.value

        sent = RequestPasswordResetResponse(status="sent", message=SENT_MESSAGE)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or user.status != UserStatus.active:
                logger.info("Password reset requested for unknown or inactive account")
                return Return.ok(sent)

            now = self.clock.now()

            reset_token = secrets.token_urlsafe(32)
            token_hash = hashlib.sha256(reset_token.encode()).hexdigest()

            # Only one issued token per user: older links stop working
            superseded_count = await self.uow.password_reset_tokens.supersede_active_for_user(
                user.id
            )

            password_reset_token = PasswordResetToken(
                user_id=user.id,
                token_hash=token_hash,
                status=PasswordResetTokenStatus.issued,
                expires_at=now + self.token_ttl,
                created_at=now,
            )
            await self.uow.password_reset_tokens.create(password_reset_token)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={
                    "email": email,
                    "token_id": str(password_reset_token.id),
                    "tokens_superseded": superseded_count,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            try:
                await self.notifier.send_password_reset(user.email, reset_token)
            except Exception as e:
                logger.error(f"Failed to dispatch password reset for user {user.id}: {e}")
                return Return.err(
                    Error(
                        "NOTIFICATION_FAILED",
                        "Password reset notification could not be delivered",
                    )
                )

            logger.info(f"Password reset token {password_reset_token.id} issued for user {user.id}")
            return Return.ok(sent)
