"""Notification port for identity events.

Delivery (email, SMS) is implemented by the host application. Every call
is fire-and-forget from the authentication service's point of view: a
failing or missing notifier never fails the primary operation.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

logger = logging.getLogger(__name__)


class IdentityNotificationService(ABC):
    """Sends user-facing notifications for identity events."""

    @abstractmethod
    async def send_email_confirmation(self, user_id: UUID, email: str, token: str) -> None:
        """Deliver an email confirmation token."""

    @abstractmethod
    async def send_password_reset(self, user_id: UUID, email: str, token: str) -> None:
        """Deliver a password reset token."""

    @abstractmethod
    async def send_password_changed(self, user_id: UUID, email: str) -> None:
        """Tell the user their password was changed."""

    @abstractmethod
    async def send_welcome_email(self, user_id: UUID, email: str) -> None:
        """Greet a newly registered user."""


class NullNotificationService(IdentityNotificationService):
    """Notifier that drops every message. Used when notifications are disabled."""

    async def send_email_confirmation(self, user_id: UUID, email: str, token: str) -> None:
        logger.debug("Notifications disabled, email confirmation dropped: %s", user_id)

    async def send_password_reset(self, user_id: UUID, email: str, token: str) -> None:
        logger.debug("Notifications disabled, password reset dropped: %s", user_id)

    async def send_password_changed(self, user_id: UUID, email: str) -> None:
        logger.debug("Notifications disabled, password changed dropped: %s", user_id)

    async def send_welcome_email(self, user_id: UUID, email: str) -> None:
        logger.debug("Notifications disabled, welcome email dropped: %s", user_id)
