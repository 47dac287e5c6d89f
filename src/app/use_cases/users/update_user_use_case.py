"""
Update User Use Case

Updates the profile (username, email) of the authenticated user.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import UpdateUserCommand, UserResponse

logger = logging.getLogger(__name__)


class UpdateUserUseCase:
    """
    Use case for updating a user's profile.

    Business Rules:
    - Users can only update their own account
    - At least one field must be provided
    - Username and email stay unique across users
    - Changing the email supersedes outstanding password reset tokens,
      since they were delivered to the previous address
    - Audit event records the changed fields
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, user_id: UUID, requesting_user_id: UUID, command: UpdateUserCommand
    ) -> Result[UserResponse]:
        """
        Execute update user use case.

        Args:
            user_id: Account to update
            requesting_user_id: User ID from JWT
            command: Fields to change

        Returns:
            Result with updated user, or Error

        Errors:
            - FORBIDDEN: Requesting user is not the account owner
            - VALIDATION_ERROR: No field to update
            - USER_NOT_FOUND: Account does not exist
            - USERNAME_ALREADY_EXISTS / EMAIL_ALREADY_EXISTS: Value taken
        """
        if user_id != requesting_user_id:
            return Return.err(Error("FORBIDDEN", "You can only update your own account"))

        if command.username is None and command.email is None:
            return Return.err(Error("VALIDATION_ERROR", "No fields to update"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            changed = {}

            if command.username is not None and command.username != user.username:
                existing = await self.uow.users.get_by_username(command.username)
                if existing is not None:
                    return Return.err(
                        Error("USERNAME_ALREADY_EXISTS", "Username already taken")
                    )
                changed["username"] = {"old": user.username, "new": command.username}
                user.username = command.username

            tokens_superseded = 0
            if command.email is not None and command.email != user.email:
                existing = await self.uow.users.get_by_email(command.email)
                if existing is not None and existing.id != user.id:
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                    )
                changed["email"] = {"old": user.email, "new": command.email}
                user.email = command.email
                tokens_superseded = await self.uow.password_reset_tokens.supersede_active_for_user(
                    user.id
                )

            if changed:
                user.updated_at = self.clock.now()
                user = await self.uow.users.update(user)

                audit_event = AuditEvent(
                    user_id=user.id,
                    action="user_updated",
                    event_metadata={
                        "changes": changed,
                        "reset_tokens_superseded": tokens_superseded,
                    },
                )
                await self.uow.audit_events.create(audit_event)

                await self.uow.commit()
                logger.info(f"User {user.id} updated fields: {', '.join(changed)}")

            return Return.ok(
                UserResponse(
                    id=str(user.id),
                    username=user.username,
                    email=user.email,
                )
            )
