"""
Database seed data.
Demo users and listings for fresh development databases.
"""

from werkzeug.security import generate_password_hash


DEMO_PASSWORD = 'SpaceShare2026!'


def seed_database(db):
    """Insert initial seed data."""

    # 1. Demo users (one host, one client)
    users_data = [
        ('host@spaceshare.local', 'Hana', 'Host'),
        ('client@spaceshare.local', 'Carl', 'Client'),
    ]

    for email, first_name, last_name in users_data:
        db.execute('''
            INSERT INTO users (email, password_hash, first_name, last_name)
            VALUES (?, ?, ?, ?)
        ''', (email, generate_password_hash(DEMO_PASSWORD), first_name, last_name))

    host_id = db.execute(
        'SELECT id FROM users WHERE email = ?', ('host@spaceshare.local',)
    ).fetchone()[0]

    # 2. Demo listings owned by the host
    listings_data = [
        ('Dry basement corner', 'Ground floor access, shelving included', 2.5, 20.0, 40.4168, -3.7038),
        ('Garage bay', 'Fits a car or about 15 boxes', 6.0, 12.0, 40.4200, -3.7000),
        ('Attic storage', 'Best for seasonal items', 1.75, 8.0, 40.4100, -3.7100),
    ]

    for title, description, price, space, lat, lng in listings_data:
        db.execute('''
            INSERT INTO listings (host_id, title, description, price, space_available, latitude, longitude)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        ''', (host_id, title, description, price, space, lat, lng))
