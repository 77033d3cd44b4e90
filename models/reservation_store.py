"""
SQLite-backed reservation store.

The orchestrator and the state machine only talk to this class, so tests
can hand the service a different store. Every method that touches more
than one row runs inside database.transaction().
"""

from database import transaction
from models import listing as listing_model
from models import reservation_crud as crud
from models import reservation_queries as queries
from models.reservation_state import APPROVED, CANCELLED, PENDING


class ReservationStore:
    """Reservation persistence over the request-scoped SQLite connection."""

    # ---- listings -----------------------------------------------------------

    def get_listing(self, listing_id: int) -> dict:
        """Non-deleted listing with 'bookings', or None."""
        return listing_model.get_listing_with_bookings(listing_id)

    # ---- reservations -------------------------------------------------------

    def create(self, **fields) -> int:
        return crud.create_reservation(**fields)

    def get(self, reservation_id: int) -> dict:
        """
        Reservation row with its listing (including deleted ones) and bookings.

        Returns:
            dict with a 'listing' key, or None
        """
        reservation = crud.get_reservation_by_id(reservation_id)
        if not reservation:
            return None
        listing = listing_model.get_listing_by_id(reservation['listing_id'], include_deleted=True)
        listing['bookings'] = listing_model.get_bookings_for_listing(listing['id'])
        reservation['listing'] = listing
        return reservation

    def get_details(self, reservation_id: int) -> dict:
        return queries.get_reservation_details(reservation_id)

    def list_for_user(self, user_id: int, as_host: bool, cleared: bool = False) -> list:
        return queries.get_reservations_for_user(user_id, as_host, cleared)

    # ---- status changes -----------------------------------------------------

    def set_status(self, reservation: dict, new_status: str) -> None:
        with transaction() as cursor:
            crud.set_status(cursor, reservation['id'], reservation['status'], new_status)

    def approve(self, reservation: dict, ensure_space) -> None:
        """
        Book the reservation's space and mark it APPROVED.

        ensure_space(bookings, total_space) runs after the write lock is
        taken and raises to abort the whole approval.
        """
        listing_id = reservation['listing_id']
        with transaction() as cursor:
            bookings = listing_model.get_bookings_for_listing(listing_id, cursor=cursor)
            ensure_space(bookings, crud.get_listing_capacity(cursor, listing_id))
            crud.insert_booking(
                cursor, listing_id, reservation['start_date'], reservation['end_date'],
                reservation['space_requested']
            )
            crud.set_status(cursor, reservation['id'], PENDING, APPROVED)

    def cancel_with_booking(self, reservation: dict) -> None:
        """Release the approved booking and mark the reservation CANCELLED."""
        with transaction() as cursor:
            crud.delete_booking(
                cursor, reservation['listing_id'], reservation['start_date'],
                reservation['end_date'], reservation['space_requested']
            )
            crud.set_status(cursor, reservation['id'], APPROVED, CANCELLED)

    # ---- rating / flags -----------------------------------------------------

    def rate(self, reservation: dict, liked: bool) -> None:
        with transaction() as cursor:
            if liked:
                listing_model.increment_likes(reservation['listing_id'], cursor)
            crud.mark_rated(cursor, reservation['id'])

    def mark_paid(self, reservation_id: int) -> bool:
        return crud.mark_paid(reservation_id)

    def clear(self, reservation_id: int, as_host: bool) -> bool:
        return crud.clear_reservation(reservation_id, as_host)
