"""
User Management Use Cases

All user-related business logic.
"""

from .update_user_use_case import UpdateUserUseCase
from .dtos import UpdateUserCommand, UserResponse

__all__ = [
    "UpdateUserUseCase",
    "UpdateUserCommand",
    "UserResponse",
]
