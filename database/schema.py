"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'shortlist_items',
        'reservations',
        'bookings',
        'listings',
        'users'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Users
    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL DEFAULT '',
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    # 2. Listings (price is per space-unit per day)
    db.execute('''
        CREATE TABLE listings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            host_id INTEGER NOT NULL REFERENCES users(id),
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            price REAL NOT NULL CHECK (price > 0),
            space_available REAL NOT NULL CHECK (space_available >= 0),
            latitude REAL,
            longitude REAL,
            available_from DATE,
            available_to DATE,
            is_active INTEGER DEFAULT 1,
            deleted_at TIMESTAMP,
            likes INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Bookings: committed allocations, half-open [start_date, end_date)
    db.execute('''
        CREATE TABLE bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            listing_id INTEGER NOT NULL REFERENCES listings(id) ON DELETE CASCADE,
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            reserved_space REAL NOT NULL CHECK (reserved_space > 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 4. Reservations
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            listing_id INTEGER NOT NULL REFERENCES listings(id),
            host_id INTEGER NOT NULL REFERENCES users(id),
            client_id INTEGER NOT NULL REFERENCES users(id),
            space_requested REAL NOT NULL CHECK (space_requested > 0),
            start_date DATE NOT NULL,
            end_date DATE NOT NULL,
            total_cost REAL NOT NULL,
            status TEXT NOT NULL DEFAULT 'PENDING'
                CHECK (status IN ('PENDING', 'APPROVED', 'DECLINED', 'CANCELLED', 'COMPLETED')),
            message TEXT,
            items TEXT,
            rated INTEGER DEFAULT 0,
            payment_completed INTEGER DEFAULT 0,
            cleared_by_host INTEGER DEFAULT 0,
            cleared_by_client INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 5. Shortlist: listings a user saved for later
    db.execute('''
        CREATE TABLE shortlist_items (
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            listing_id INTEGER NOT NULL REFERENCES listings(id) ON DELETE CASCADE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (user_id, listing_id)
        )
    ''')


def create_indexes(db):
    """Create database indexes for performance."""

    # Listings
    db.execute('CREATE INDEX idx_listings_host ON listings(host_id)')
    db.execute('CREATE INDEX idx_listings_active ON listings(is_active, deleted_at)')

    # Bookings
    db.execute('CREATE INDEX idx_bookings_listing_dates ON bookings(listing_id, start_date, end_date)')

    # Reservations
    db.execute('CREATE INDEX idx_reservations_listing ON reservations(listing_id, status)')
    db.execute('CREATE INDEX idx_reservations_host ON reservations(host_id, created_at)')
    db.execute('CREATE INDEX idx_reservations_client ON reservations(client_id, created_at)')
