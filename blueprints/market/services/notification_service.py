"""
Notification Service - tells the other party about reservation events.

Resolves recipients through the user model, builds a plain subject/body and
hands the message to every configured channel. Delivery adapters (email,
push, chat) are external; the default channel writes to the application log.
"""

import logging

from flask import current_app, has_app_context

from models.user import get_user_by_id
from utils.helpers import format_date

logger = logging.getLogger(__name__)


class LogChannel:
    """Channel that writes messages to the log instead of delivering them."""

    def send(self, to: str, subject: str, body: str) -> None:
        logger.info('Notification to %s: %s | %s', to, subject, body)


class NotificationService:
    """
    Reservation event notifications.

    Args:
        channels: Objects with send(to, subject, body); defaults to [LogChannel()]
    """

    def __init__(self, channels=None):
        self.channels = channels if channels is not None else [LogChannel()]

    def _enabled(self) -> bool:
        if has_app_context():
            return current_app.config.get('NOTIFICATIONS_ENABLED', True)
        return True

    def _dispatch(self, user_id: int, subject: str, body: str) -> bool:
        if not self._enabled():
            return False

        user = get_user_by_id(user_id)
        if not user:
            logger.warning('Notification skipped, user %s not found', user_id)
            return False

        for channel in self.channels:
            channel.send(user['email'], subject, body)
        return True

    def notify_host_of_new_reservation(self, host_id: int, client_name: str, listing_title: str,
                                       space, start_date, end_date) -> bool:
        """
        Tell a host a client requested space on their listing.

        Returns:
            True if the message was handed to the channels
        """
        subject = f'New reservation request for {listing_title}'
        body = (
            f'{client_name} requested {space} units of space from '
            f'{format_date(start_date)} to {format_date(end_date)}.'
        )
        return self._dispatch(host_id, subject, body)

    def notify_client_of_status_change(self, client_id: int, listing_title: str, status: str,
                                       start_date, end_date) -> bool:
        """Tell a client their reservation was approved, declined, etc."""
        subject = f'Your reservation for {listing_title} is {status.lower()}'
        body = (
            f'Your reservation from {format_date(start_date)} to '
            f'{format_date(end_date)} is now {status.lower()}.'
        )
        return self._dispatch(client_id, subject, body)

    def notify_host_of_cancellation(self, host_id: int, client_id: int, listing_title: str,
                                    start_date, end_date) -> bool:
        """Tell a host a client cancelled."""
        client = get_user_by_id(client_id)
        client_name = client['first_name'] if client else 'A client'
        subject = f'Reservation cancelled for {listing_title}'
        body = (
            f'{client_name} cancelled the reservation from '
            f'{format_date(start_date)} to {format_date(end_date)}.'
        )
        return self._dispatch(host_id, subject, body)
