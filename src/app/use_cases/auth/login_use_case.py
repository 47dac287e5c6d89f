"""
Login Use Case

Handles user authentication and returns a JWT access token.
"""

import bcrypt

from libs.result import Error, Result, Return
from src.app.services.password_policy import BCRYPT_MAX_BYTES
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, UserStatus
from src.api.utils.jwt import generate_jwt
from .dtos import LoginResponse, UserInfo


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - User must have status=active
    - Records a login audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing access token and user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            # Always perform hash check even if user not found
            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.hashpw(b"dummy", bcrypt.gensalt(12)))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            # No stored hash can match input beyond the bcrypt limit
            if len(password.encode()) > BCRYPT_MAX_BYTES:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), user.password_hash.encode()
            )

            if not password_valid:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if user.status == UserStatus.disabled:
                return Return.err(Error("USER_DISABLED", "User account is disabled"))

            audit = AuditEvent(
                user_id=user.id,
                action="login",
                event_metadata={"email": email},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            access_token = generate_jwt(user.id)

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    user=UserInfo(
                        id=str(user.id),
                        username=user.username,
                        email=user.email,
                    ),
                )
            )
