"""
Reservation CRUD operations.
Handles create and read of reservations plus the row-level writes used by
status transitions. Writes that take a cursor run on the caller's
transaction and never commit themselves.
"""

import json

from database import get_db
from models.reservation_state import PENDING
from utils.errors import ConflictError
from utils.helpers import to_iso
from utils.messages import MESSAGES


# =============================================================================
# CREATE
# =============================================================================

def create_reservation(
    listing_id: int,
    host_id: int,
    client_id: int,
    space_requested: float,
    start_date,
    end_date,
    total_cost: float,
    message: str = None,
    items=None
) -> int:
    """
    Insert a PENDING reservation.

    Args:
        listing_id: Listing ID
        host_id: Listing owner (denormalized for list queries)
        client_id: Requesting user
        space_requested: Space units requested
        start_date: Range start
        end_date: Range end (exclusive)
        total_cost: Cost computed at request time
        message: Optional note to the host
        items: Optional declaration of stored items (JSON-serializable)

    Returns:
        New reservation ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO reservations (listing_id, host_id, client_id, space_requested,
                                  start_date, end_date, total_cost, status, message, items)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    ''', (listing_id, host_id, client_id, space_requested, to_iso(start_date), to_iso(end_date),
          total_cost, PENDING, message, json.dumps(items) if items is not None else None))
    db.commit()
    return cursor.lastrowid


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> dict:
    """
    Get reservation row by ID.

    Args:
        reservation_id: Reservation ID

    Returns:
        Reservation dict or None
    """
    db = get_db()
    row = db.execute('SELECT * FROM reservations WHERE id = ?', (reservation_id,)).fetchone()
    return dict(row) if row else None


# =============================================================================
# TRANSACTIONAL WRITES
# =============================================================================

def set_status(cursor, reservation_id: int, expected_status: str, new_status: str) -> None:
    """
    Move a reservation from expected_status to new_status.

    Raises:
        ConflictError: If the reservation is no longer in expected_status
    """
    cursor.execute('''
        UPDATE reservations
        SET status = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ? AND status = ?
    ''', (new_status, reservation_id, expected_status))

    if cursor.rowcount == 0:
        raise ConflictError(MESSAGES['concurrent_update'])


def insert_booking(cursor, listing_id: int, start_date, end_date, reserved_space: float) -> int:
    """Insert a committed booking row. Returns the booking ID."""
    cursor.execute('''
        INSERT INTO bookings (listing_id, start_date, end_date, reserved_space)
        VALUES (?, ?, ?, ?)
    ''', (listing_id, to_iso(start_date), to_iso(end_date), reserved_space))
    return cursor.lastrowid


def delete_booking(cursor, listing_id: int, start_date, end_date, reserved_space: float) -> bool:
    """
    Delete one booking row matching the reservation's range and space.

    Returns:
        True if a row was deleted
    """
    cursor.execute('''
        DELETE FROM bookings
        WHERE id = (
            SELECT id FROM bookings
            WHERE listing_id = ? AND start_date = ? AND end_date = ? AND reserved_space = ?
            ORDER BY id
            LIMIT 1
        )
    ''', (listing_id, to_iso(start_date), to_iso(end_date), reserved_space))
    return cursor.rowcount > 0


def get_listing_capacity(cursor, listing_id: int) -> float:
    """Read a listing's space_available on the caller's transaction."""
    cursor.execute('SELECT space_available FROM listings WHERE id = ?', (listing_id,))
    row = cursor.fetchone()
    return float(row['space_available']) if row else 0.0


def mark_rated(cursor, reservation_id: int) -> None:
    """
    Flag a reservation as rated.

    Raises:
        ConflictError: If it was rated concurrently
    """
    cursor.execute('''
        UPDATE reservations
        SET rated = 1, updated_at = CURRENT_TIMESTAMP
        WHERE id = ? AND rated = 0
    ''', (reservation_id,))

    if cursor.rowcount == 0:
        raise ConflictError(MESSAGES['concurrent_update'])


# =============================================================================
# FLAGS
# =============================================================================

def mark_paid(reservation_id: int) -> bool:
    """
    Record payment for an APPROVED reservation.

    Returns:
        True if updated
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE reservations
        SET payment_completed = 1, updated_at = CURRENT_TIMESTAMP
        WHERE id = ? AND status = 'APPROVED' AND payment_completed = 0
    ''', (reservation_id,))
    db.commit()
    return cursor.rowcount > 0


def clear_reservation(reservation_id: int, as_host: bool) -> bool:
    """
    Hide a reservation from the host's or the client's list.

    Args:
        reservation_id: Reservation ID
        as_host: Clear for the host (True) or the client (False)

    Returns:
        True if updated
    """
    column = 'cleared_by_host' if as_host else 'cleared_by_client'
    db = get_db()
    cursor = db.cursor()
    cursor.execute(f'''
        UPDATE reservations
        SET {column} = 1, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (reservation_id,))
    db.commit()
    return cursor.rowcount > 0
