"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserStatus,
    PasswordResetTokenStatus,
)

# Export all entities
from .user import User
from .password_reset_token import PasswordResetToken
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "UserStatus",
    "PasswordResetTokenStatus",
    # Entities
    "User",
    "PasswordResetToken",
    "AuditEvent",
]
