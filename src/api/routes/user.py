from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, ServerError
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import UpdateUserCommand, UpdateUserUseCase, UserResponse
from src.depends import get_clock, get_current_user, get_unit_of_work

router = APIRouter(prefix="/auth/users", tags=["User"])


class UpdateUserRequest(BaseModel):
    """PUT /auth/users/{user_id} request payload"""

    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None


@router.put("/{user_id}", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Update User

    Updates username and/or email of the authenticated user.

    Raises:
        - 400 Bad Request: Empty or invalid payload
        - 401 Unauthorized: Missing, invalid or expired JWT
        - 403 Forbidden: Updating another user's account
        - 404 Not Found: User not found
        - 409 Conflict: Username or email already taken
        - 500 Internal Server Error: Server error
    """
    requesting_user_id = UUID(current_user["user_id"])

    command = UpdateUserCommand(username=request.username, email=request.email)

    use_case = UpdateUserUseCase(uow, clock)
    result = await use_case.execute(user_id, requesting_user_id, command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("USERNAME_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
