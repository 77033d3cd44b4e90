"""
Shortlist data access functions.
Listings a user has saved for later, one row per (user, listing).
"""

from database import get_db


def get_shortlist_ids(user_id: int) -> list:
    """Listing IDs on a user's shortlist, in the order they were added."""
    db = get_db()
    rows = db.execute('''
        SELECT listing_id FROM shortlist_items
        WHERE user_id = ?
        ORDER BY created_at, rowid
    ''', (user_id,)).fetchall()
    return [row['listing_id'] for row in rows]


def get_shortlisted_listings(user_id: int) -> list:
    """
    Get the shortlisted listings that can still be reserved.

    Inactive and soft-deleted listings stay on the shortlist but are not
    returned.

    Args:
        user_id: User ID

    Returns:
        List of listing dicts, in the order they were added
    """
    db = get_db()
    rows = db.execute('''
        SELECT l.*
        FROM shortlist_items s
        JOIN listings l ON s.listing_id = l.id
        WHERE s.user_id = ? AND l.is_active = 1 AND l.deleted_at IS NULL
        ORDER BY s.created_at, s.rowid
    ''', (user_id,)).fetchall()
    return [dict(row) for row in rows]


def is_shortlisted(user_id: int, listing_id: int) -> bool:
    db = get_db()
    row = db.execute('''
        SELECT 1 FROM shortlist_items WHERE user_id = ? AND listing_id = ?
    ''', (user_id, listing_id)).fetchone()
    return row is not None


def add_to_shortlist(user_id: int, listing_id: int) -> bool:
    """
    Add a listing to a user's shortlist.

    Returns:
        True if added, False if it was already there
    """
    db = get_db()
    cursor = db.execute('''
        INSERT OR IGNORE INTO shortlist_items (user_id, listing_id)
        VALUES (?, ?)
    ''', (user_id, listing_id))
    db.commit()
    return cursor.rowcount > 0


def remove_from_shortlist(user_id: int, listing_id: int) -> bool:
    """
    Remove a listing from a user's shortlist.

    Returns:
        True if removed, False if it was not there
    """
    db = get_db()
    cursor = db.execute('''
        DELETE FROM shortlist_items WHERE user_id = ? AND listing_id = ?
    ''', (user_id, listing_id))
    db.commit()
    return cursor.rowcount > 0
