"""
Admin Use Cases

System maintenance operations, authenticated with the admin API key.
"""

from .purge_expired_reset_tokens_use_case import (
    PurgeExpiredResetTokensUseCase,
    PurgeResetTokensResponse,
)

__all__ = [
    "PurgeExpiredResetTokensUseCase",
    "PurgeResetTokensResponse",
]
