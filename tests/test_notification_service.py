"""
Tests for reservation notifications.
"""

import logging

from blueprints.market.services.notification_service import LogChannel, NotificationService


class CollectingChannel:

    def __init__(self):
        self.sent = []

    def send(self, to, subject, body):
        self.sent.append((to, subject, body))


class TestNotificationService:

    def test_new_reservation_goes_to_host(self, ctx, users):
        channel = CollectingChannel()
        service = NotificationService(channels=[channel])

        assert service.notify_host_of_new_reservation(
            users['host'], 'Carl', 'Dry garage', 10, '2026-03-01', '2026-03-03'
        ) is True

        to, subject, body = channel.sent[0]
        assert to == 'host@example.com'
        assert subject == 'New reservation request for Dry garage'
        assert 'Carl requested 10 units' in body
        assert 'Mar 01, 2026' in body

    def test_status_change_goes_to_client(self, ctx, users):
        channel = CollectingChannel()
        NotificationService(channels=[channel]).notify_client_of_status_change(
            users['client'], 'Dry garage', 'APPROVED', '2026-03-01', '2026-03-03'
        )
        assert channel.sent[0][0] == 'client@example.com'
        assert 'approved' in channel.sent[0][1]

    def test_cancellation_names_client(self, ctx, users):
        channel = CollectingChannel()
        NotificationService(channels=[channel]).notify_host_of_cancellation(
            users['host'], users['client'], 'Dry garage', '2026-03-01', '2026-03-03'
        )
        assert channel.sent[0][0] == 'host@example.com'
        assert channel.sent[0][2].startswith('Carl cancelled')

    def test_unknown_recipient_skipped(self, ctx):
        channel = CollectingChannel()
        sent = NotificationService(channels=[channel]).notify_client_of_status_change(
            999, 'Dry garage', 'DECLINED', '2026-03-01', '2026-03-03'
        )
        assert sent is False
        assert channel.sent == []

    def test_disabled_by_config(self, ctx, users):
        ctx.config['NOTIFICATIONS_ENABLED'] = False
        channel = CollectingChannel()
        sent = NotificationService(channels=[channel]).notify_client_of_status_change(
            users['client'], 'Dry garage', 'DECLINED', '2026-03-01', '2026-03-03'
        )
        assert sent is False
        assert channel.sent == []

    def test_default_log_channel(self, ctx, users, caplog):
        service = NotificationService()
        assert isinstance(service.channels[0], LogChannel)

        with caplog.at_level(logging.INFO):
            service.notify_client_of_status_change(
                users['client'], 'Dry garage', 'APPROVED', '2026-03-01', '2026-03-03'
            )
        assert 'Notification to client@example.com' in caplog.text
