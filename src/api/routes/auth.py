from datetime import timedelta

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.clock import Clock
from src.app.services.notification_dispatcher import INotificationDispatcher
from src.app.services.password_policy import PasswordPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    SignupCommand,
    SignupResponse,
    SignupUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    LoginResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)
from src.depends import (
    get_clock,
    get_notification_dispatcher,
    get_password_policy,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    Password strength is checked by the use case against the password policy.
    """

    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    User Signup

    Creates a new user account and returns a JWT access token.

    Raises:
        - 400 Bad Request: Invalid input or weak password
        - 409 Conflict: Email or username already exists
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        username=request.username, email=request.email, password=request.password
    )

    use_case = SignupUseCase(uow, password_policy)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "WEAK_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("EMAIL_ALREADY_EXISTS", "USERNAME_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Authenticates user and returns a JWT access token.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: User disabled
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "USER_DISABLED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """Request password reset HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    clock: Clock = Depends(get_clock),
):
    """
    Request Password Reset

    Generates a single-use password reset token and dispatches it to the
    account's email address. Any earlier token of the account stops working.

    Security:
        - No email enumeration (same response for known/unknown emails)
        - Token is cryptographically secure (32 bytes), stored as SHA-256

    Returns:
        - 200 OK: Always returns success for a well-formed email
        - 400 Bad Request: Missing or malformed email
        - 500 Internal Server Error: Server error or delivery failure
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        clock,
        token_ttl=timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordCompleteRequest(BaseModel):
    """Complete password reset HTTP request payload"""

    token: str = Field(..., min_length=1, description="Password reset token from email")
    password: str = Field(..., description="New password")


@router.post(
    "/reset-password-complete",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password_complete(
    request: ResetPasswordCompleteRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
    password_policy: PasswordPolicy = Depends(get_password_policy),
):
    """
    Complete Password Reset

    Validates the reset token, then the new password, and replaces the
    account's password. The token can never be used again.

    Raises:
        - 400 Bad Request: INVALID_TOKEN (unknown, expired, used or
          superseded) or WEAK_PASSWORD
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow, clock, password_policy)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "WEAK_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
