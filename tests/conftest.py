"""
Pytest configuration and fixtures.
Every test gets its own SQLite file, so tests never touch the development database.
"""

import os
from datetime import date

import pytest

os.environ['FLASK_ENV'] = 'test'

PASSWORD = 'Passw0rd123'

# Fixed "today" for service tests
TODAY = date(2026, 3, 10)


class RecordingNotifier:
    """Notifier double that records calls instead of sending anything."""

    def __init__(self):
        self.calls = []

    def notify_host_of_new_reservation(self, *args):
        self.calls.append(('new_reservation', args))

    def notify_client_of_status_change(self, *args):
        self.calls.append(('status_change', args))

    def notify_host_of_cancellation(self, *args):
        self.calls.append(('cancellation', args))

    def names(self):
        return [name for name, _ in self.calls]


@pytest.fixture
def app(tmp_path):
    """Create test application with an isolated database file."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = str(tmp_path / 'spaceshare_test.db')

    with app.app_context():
        init_db(seed=False)

    yield app


@pytest.fixture
def ctx(app):
    """Push an app context for tests that call models and services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def users(app):
    """A host, a client and an unrelated third user."""
    from models.user import create_user

    with app.app_context():
        return {
            'host': create_user('host@example.com', PASSWORD, 'Hana', 'Host'),
            'client': create_user('client@example.com', PASSWORD, 'Carl', 'Client'),
            'other': create_user('other@example.com', PASSWORD, 'Olga', 'Other'),
        }


@pytest.fixture
def listing_id(app, users):
    """Listing with 100 units at 10.00 per unit per day, owned by the host."""
    from models.listing import create_listing

    with app.app_context():
        return create_listing(
            host_id=users['host'],
            title='Dry garage',
            price=10.0,
            space_available=100.0,
            latitude=40.4168,
            longitude=-3.7038,
        )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def service(ctx, notifier, today):
    """ReservationService on the test database with a fixed clock."""
    from blueprints.market.services.reservation_service import ReservationService

    return ReservationService(notifier=notifier, today_func=lambda: today)


def login(client, email, password=PASSWORD):
    """Log a test client in through the JSON endpoint."""
    response = client.post('/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def host_client(app, users):
    client = app.test_client()
    login(client, 'host@example.com')
    return client


@pytest.fixture
def client_client(app, users):
    client = app.test_client()
    login(client, 'client@example.com')
    return client


@pytest.fixture
def other_client(app, users):
    client = app.test_client()
    login(client, 'other@example.com')
    return client
