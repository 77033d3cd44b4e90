"""
Reservation query operations.
Joined reads returning reservations with listing, host and client summaries.
"""

from database import get_db
from utils.helpers import serialize_row

RESERVATION_BOOL_FIELDS = ('rated', 'payment_completed', 'cleared_by_host', 'cleared_by_client')

_DETAIL_SELECT = '''
    SELECT r.*,
           l.title AS listing_title, l.price AS listing_price,
           l.latitude AS listing_latitude, l.longitude AS listing_longitude,
           l.deleted_at AS listing_deleted_at,
           h.first_name AS host_first_name, h.last_name AS host_last_name, h.email AS host_email,
           c.first_name AS client_first_name, c.last_name AS client_last_name, c.email AS client_email
    FROM reservations r
    JOIN listings l ON r.listing_id = l.id
    JOIN users h ON r.host_id = h.id
    JOIN users c ON r.client_id = c.id
'''


def format_reservation(row: dict) -> dict:
    """
    Nest the joined columns of a detail row and make it JSON friendly.

    Args:
        row: Row from _DETAIL_SELECT

    Returns:
        Reservation dict with 'listing', 'host' and 'client' sub-dicts
    """
    row = dict(row)
    listing = {
        'id': row['listing_id'],
        'title': row.pop('listing_title'),
        'price': row.pop('listing_price'),
        'latitude': row.pop('listing_latitude'),
        'longitude': row.pop('listing_longitude'),
        'deleted': row.pop('listing_deleted_at') is not None,
    }
    host = {'id': row['host_id']}
    client = {'id': row['client_id']}
    for prefix, target in (('host', host), ('client', client)):
        for field in ('first_name', 'last_name', 'email'):
            target[field] = row.pop(f'{prefix}_{field}')

    result = serialize_row(row, bool_fields=RESERVATION_BOOL_FIELDS, json_fields=('items',))
    result['listing'] = listing
    result['host'] = host
    result['client'] = client
    return result


def get_reservation_details(reservation_id: int) -> dict:
    """
    Get one reservation with listing/host/client summaries.

    Args:
        reservation_id: Reservation ID

    Returns:
        Formatted reservation dict or None
    """
    db = get_db()
    row = db.execute(_DETAIL_SELECT + ' WHERE r.id = ?', (reservation_id,)).fetchone()
    return format_reservation(row) if row else None


def get_reservations_for_user(user_id: int, as_host: bool, cleared: bool = False) -> list:
    """
    List reservations where the user is host or client.

    Args:
        user_id: User ID
        as_host: Match on host_id (True) or client_id (False)
        cleared: Return reservations the user has cleared instead of visible ones

    Returns:
        List of formatted reservation dicts, newest first
    """
    party = 'host' if as_host else 'client'
    query = _DETAIL_SELECT + f'''
        WHERE r.{party}_id = ? AND r.cleared_by_{party} = ?
        ORDER BY r.created_at DESC, r.id DESC
    '''
    db = get_db()
    rows = db.execute(query, (user_id, 1 if cleared else 0)).fetchall()
    return [format_reservation(row) for row in rows]
