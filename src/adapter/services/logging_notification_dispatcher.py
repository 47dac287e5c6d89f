"""
Logging Notification Dispatcher

Development delivery channel: writes the password reset link to the log
instead of sending an email.
"""

import logging

from src.app.services.notification_dispatcher import INotificationDispatcher

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    """
    Notification dispatcher for local development.

    The reset link is built from RESET_URL_TEMPLATE, e.g.
    http://localhost:3000/reset-password?token={token}
    """

    def __init__(self, reset_url_template: str):
        self.reset_url_template = reset_url_template

    async def send_password_reset(self, email: str, reset_token: str) -> None:
        reset_url = self.reset_url_template.format(token=reset_token)
        logger.info(f"EMAIL (development mode - not sent) to={email} subject=Reset your password link={reset_url}")
