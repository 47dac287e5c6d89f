"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    disabled = "disabled"


class PasswordResetTokenStatus(str, Enum):
    """
    Stored lifecycle state of a password reset token.

    Expiry is not stored: an issued token past its expires_at is expired.
    """

    issued = "issued"
    consumed = "consumed"
    superseded = "superseded"
