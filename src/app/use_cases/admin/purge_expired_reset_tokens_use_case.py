"""
Use Case: Purge Expired Password Reset Tokens

Deletes reset tokens that can never be used again.
"""

import logging

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class PurgeResetTokensResponse(BaseModel):
    """Response DTO for PurgeExpiredResetTokensUseCase"""

    status: str
    tokens_purged: int


class PurgeExpiredResetTokensUseCase:
    """
    Purge terminal password reset tokens.

    Business Logic:
    1. Delete tokens that are consumed, superseded, or past expires_at
    2. Keep issued, unexpired tokens untouched
    3. Create audit event with the purge count
    4. Return purge statistics
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self) -> Result[PurgeResetTokensResponse]:
        async with self.uow:
            now = self.clock.now()
            purged = await self.uow.password_reset_tokens.delete_inactive(now)

            audit_event = AuditEvent(
                user_id=None,
                action="reset_tokens_purged",
                event_metadata={"tokens_purged": purged},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Purged {purged} inactive password reset tokens")
            return Return.ok(PurgeResetTokensResponse(status="purged", tokens_purged=purged))
