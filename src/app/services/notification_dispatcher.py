from abc import ABC, abstractmethod


class INotificationDispatcher(ABC):
    """
    Out-of-band delivery port - application layer

    Implementations deliver the plain reset token (never its hash) to the
    account's email address. Failures are raised, not swallowed.
    """

    @abstractmethod
    async def send_password_reset(self, email: str, reset_token: str) -> None:
        """Deliver a password reset token to the given email address"""
        pass
