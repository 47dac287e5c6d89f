"""
Use Cases

Use cases are organized into domain folders:
- auth/: Signup, login and the password reset workflow
- users/: User management
- admin/: Maintenance operations

Import from subdirectories for better organization.
"""

from .auth import (
    SignupUseCase,
    SignupCommand,
    SignupResponse,
    LoginUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .users import (
    UpdateUserUseCase,
    UpdateUserCommand,
)
from .admin import (
    PurgeExpiredResetTokensUseCase,
)

__all__ = [
    # Auth
    "SignupUseCase",
    "SignupCommand",
    "SignupResponse",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "UpdateUserUseCase",
    "UpdateUserCommand",
    # Admin
    "PurgeExpiredResetTokensUseCase",
]
