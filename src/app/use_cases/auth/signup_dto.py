"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (validated business intent)
- SignupResponse: Output from use case (structured result)
"""

from pydantic import BaseModel

from .dtos import UserInfo


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    username: str
    email: str
    password: str


class SignupResponse(BaseModel):
    """
    Signup response - structured output from use case

    Contains all data needed for API response.
    Decoupled from HTTP response format.
    """

    user: UserInfo
    access_token: str
