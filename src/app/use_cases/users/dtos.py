"""
User Management Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class UpdateUserCommand(BaseModel):
    """Fields a user may change on their own account"""

    username: Optional[str] = None
    email: Optional[str] = None


class UserResponse(BaseModel):
    """User details in response"""

    id: str
    username: str
    email: str
