"""
Listing data access functions.
Handles listing CRUD, booking reads, like counters and the soft-delete cascade.
"""

import logging

from database import get_db, transaction
from utils.helpers import to_iso

logger = logging.getLogger(__name__)

LISTING_FIELDS = [
    'title', 'description', 'price', 'space_available', 'latitude',
    'longitude', 'available_from', 'available_to', 'is_active'
]


# =============================================================================
# READ
# =============================================================================

def get_listing_by_id(listing_id: int, include_deleted: bool = False) -> dict:
    """
    Get listing by ID.

    Args:
        listing_id: Listing ID
        include_deleted: Also return soft-deleted listings

    Returns:
        Listing dict or None if not found
    """
    db = get_db()
    query = 'SELECT * FROM listings WHERE id = ?'
    if not include_deleted:
        query += ' AND deleted_at IS NULL'

    row = db.execute(query, (listing_id,)).fetchone()
    return dict(row) if row else None


def get_bookings_for_listing(listing_id: int, cursor=None) -> list:
    """
    Get all committed bookings of a listing.

    Args:
        listing_id: Listing ID
        cursor: Optional cursor of an open transaction

    Returns:
        List of booking dicts ordered by start_date
    """
    cur = cursor or get_db().cursor()
    cur.execute('''
        SELECT id, listing_id, start_date, end_date, reserved_space
        FROM bookings
        WHERE listing_id = ?
        ORDER BY start_date, id
    ''', (listing_id,))
    return [dict(row) for row in cur.fetchall()]


def get_listing_with_bookings(listing_id: int) -> dict:
    """
    Get a non-deleted listing with its bookings under 'bookings'.

    Returns:
        Listing dict or None
    """
    listing = get_listing_by_id(listing_id)
    if not listing:
        return None
    listing['bookings'] = get_bookings_for_listing(listing_id)
    return listing


def get_active_listings(exclude_host_id: int = None) -> list:
    """
    Get active, non-deleted listings with their bookings.

    Args:
        exclude_host_id: Skip listings owned by this user

    Returns:
        List of listing dicts, newest first
    """
    db = get_db()
    query = 'SELECT * FROM listings WHERE is_active = 1 AND deleted_at IS NULL'
    params = []

    if exclude_host_id is not None:
        query += ' AND host_id != ?'
        params.append(exclude_host_id)

    query += ' ORDER BY created_at DESC, id DESC'

    listings = [dict(row) for row in db.execute(query, params).fetchall()]
    if not listings:
        return listings

    # One query for all bookings instead of one per listing
    by_listing = {listing['id']: listing for listing in listings}
    for listing in listings:
        listing['bookings'] = []

    placeholders = ','.join('?' * len(by_listing))
    rows = db.execute(f'''
        SELECT id, listing_id, start_date, end_date, reserved_space
        FROM bookings
        WHERE listing_id IN ({placeholders})
    ''', list(by_listing)).fetchall()
    for row in rows:
        by_listing[row['listing_id']]['bookings'].append(dict(row))

    return listings


def get_listings_by_host(host_id: int) -> list:
    """
    Get a host's non-deleted listings.

    Args:
        host_id: Host user ID

    Returns:
        List of listing dicts, newest first
    """
    db = get_db()
    rows = db.execute('''
        SELECT * FROM listings
        WHERE host_id = ? AND deleted_at IS NULL
        ORDER BY created_at DESC, id DESC
    ''', (host_id,)).fetchall()
    return [dict(row) for row in rows]


# =============================================================================
# CREATE / UPDATE
# =============================================================================

def create_listing(
    host_id: int,
    title: str,
    price: float,
    space_available: float,
    description: str = '',
    latitude: float = None,
    longitude: float = None,
    available_from=None,
    available_to=None
) -> int:
    """
    Create a new listing.

    Args:
        host_id: Owner user ID
        title: Listing title
        price: Price per space-unit per day
        space_available: Total capacity
        description: Free text
        latitude: Optional latitude
        longitude: Optional longitude
        available_from: Optional first reservable date
        available_to: Optional last reservable date

    Returns:
        New listing ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO listings (host_id, title, description, price, space_available,
                              latitude, longitude, available_from, available_to)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (host_id, title, description or '', price, space_available, latitude, longitude,
          to_iso(available_from), to_iso(available_to)))
    db.commit()
    return cursor.lastrowid


def update_listing(listing_id: int, **kwargs) -> bool:
    """
    Update listing fields.

    Args:
        listing_id: Listing ID
        **kwargs: Any of LISTING_FIELDS

    Returns:
        True if a row was updated
    """
    updates = []
    values = []

    for field in LISTING_FIELDS:
        if field in kwargs:
            updates.append(f'{field} = ?')
            values.append(to_iso(kwargs[field]))

    if not updates:
        return False

    updates.append('updated_at = CURRENT_TIMESTAMP')
    values.append(listing_id)

    db = get_db()
    cursor = db.cursor()
    cursor.execute(
        f'UPDATE listings SET {", ".join(updates)} WHERE id = ? AND deleted_at IS NULL',
        values
    )
    db.commit()
    return cursor.rowcount > 0


def increment_likes(listing_id: int, cursor) -> None:
    """
    Add one like to a listing. Runs on the caller's transaction cursor.

    Args:
        listing_id: Listing ID
        cursor: Cursor of an open transaction
    """
    cursor.execute('''
        UPDATE listings SET likes = likes + 1, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (listing_id,))


# =============================================================================
# SOFT DELETE
# =============================================================================

def soft_delete_listing(listing_id: int) -> dict:
    """
    Deactivate a listing and release everything reserved on it.

    In one transaction:
    1. Marks the listing inactive and stamps deleted_at
    2. Declines its PENDING reservations
    3. Deletes the bookings of its APPROVED reservations
    4. Cancels those APPROVED reservations

    Args:
        listing_id: Listing ID

    Returns:
        dict: {'declined': int, 'cancelled': int}
    """
    with transaction() as cursor:
        cursor.execute('''
            UPDATE listings
            SET is_active = 0, deleted_at = CURRENT_TIMESTAMP, updated_at = CURRENT_TIMESTAMP
            WHERE id = ? AND deleted_at IS NULL
        ''', (listing_id,))

        cursor.execute('''
            UPDATE reservations
            SET status = 'DECLINED', updated_at = CURRENT_TIMESTAMP
            WHERE listing_id = ? AND status = 'PENDING'
        ''', (listing_id,))
        declined = cursor.rowcount

        # Each approved reservation owns exactly one booking row
        cursor.execute('''
            DELETE FROM bookings
            WHERE listing_id = ?
              AND id IN (
                  SELECT b.id FROM bookings b
                  JOIN reservations r
                    ON r.listing_id = b.listing_id
                   AND r.start_date = b.start_date
                   AND r.end_date = b.end_date
                   AND r.space_requested = b.reserved_space
                  WHERE r.listing_id = ? AND r.status = 'APPROVED'
              )
        ''', (listing_id, listing_id))

        cursor.execute('''
            UPDATE reservations
            SET status = 'CANCELLED', updated_at = CURRENT_TIMESTAMP
            WHERE listing_id = ? AND status = 'APPROVED'
        ''', (listing_id,))
        cancelled = cursor.rowcount

    logger.info('Listing %s deleted: %s declined, %s cancelled', listing_id, declined, cancelled)
    return {'declined': declined, 'cancelled': cancelled}
