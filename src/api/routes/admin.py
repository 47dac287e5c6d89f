"""
Admin API Routes - Maintenance Endpoints

These endpoints are for schedulers and operators.
Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    PurgeExpiredResetTokensUseCase,
    PurgeResetTokensResponse,
)
from src.depends import get_clock, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/password-reset-tokens/purge",
    status_code=status.HTTP_200_OK,
    response_model=PurgeResetTokensResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_password_reset_tokens(
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Purge Password Reset Tokens

    Deletes expired, consumed and superseded password reset tokens.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = PurgeExpiredResetTokensUseCase(uow, clock)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
