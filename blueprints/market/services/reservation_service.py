"""
Reservation Service - business rules for the reservation lifecycle.

Handles:
- Request validation and cost calculation on creation
- Role-gated status transitions through the transition table
- Rating, payment and list-clearing flags
- Best-effort notifications of the other party

Collaborators are passed in, so tests can swap the store, the notifier or
the clock:

    service = ReservationService(today_func=lambda: date(2026, 3, 10))
"""

import logging
import math

from blueprints.market.services.notification_service import NotificationService
from models.availability import available_space
from models.pricing import calculate_cost, calculate_days
from models.reservation import (
    APPROVED, CLIENT, HOST, RESERVATION_STATUSES, STATUS_ACTIONS,
    ReservationStore, get_transition, is_terminal
)
from utils.datetime_helpers import get_today
from utils.errors import (
    AlreadyRatedError, ForbiddenError, InvalidInputError, InvalidTransitionError,
    NotFoundError, NotReservationClientError, RatingTooEarlyError,
    ReservationListingMismatchError, ReservationNotApprovedError
)
from utils.messages import MESSAGES
from utils.validators import parse_iso_date

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT HELPERS
# =============================================================================

def parse_request_range(space, start_date, end_date) -> tuple:
    """
    Validate a (space, start, end) request.

    Returns:
        (float space, date start, date end)

    Raises:
        InvalidInputError: Bad date, end not after start, or space not a positive finite number
    """
    try:
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
    except ValueError:
        raise InvalidInputError(MESSAGES['invalid_date'].format(
            value=f'{start_date} / {end_date}'))

    if end <= start:
        raise InvalidInputError(MESSAGES['invalid_date_range'])

    try:
        space = float(space)
    except (TypeError, ValueError):
        raise InvalidInputError(MESSAGES['invalid_space'])
    if not math.isfinite(space) or space <= 0:
        raise InvalidInputError(MESSAGES['invalid_space'])

    return space, start, end


def within_listing_window(listing: dict, start, end) -> bool:
    """True if [start, end) fits the listing's optional availability window."""
    if listing.get('available_from') and parse_iso_date(listing['available_from']) > start:
        return False
    if listing.get('available_to') and parse_iso_date(listing['available_to']) < end:
        return False
    return True


class ReservationService:
    """
    Reservation orchestrator.

    Args:
        store: Persistence object (defaults to ReservationStore)
        notifier: Notification object (defaults to NotificationService)
        today_func: Callable returning today's date (defaults to get_today)
    """

    def __init__(self, store=None, notifier=None, today_func=None):
        self.store = store or ReservationStore()
        self.notifier = notifier or NotificationService()
        self.today = today_func or get_today

    # =========================================================================
    # CREATE
    # =========================================================================

    def create(self, listing_id: int, client_id: int, client_name: str, space_requested,
               start_date, end_date, message: str = None, items=None) -> dict:
        """
        Request space on a listing.

        Args:
            listing_id: Listing to reserve
            client_id: Requesting user
            client_name: Display name used in the host notification
            space_requested: Space units (> 0)
            start_date: Range start (ISO string or date)
            end_date: Range end, exclusive, after start_date
            message: Optional note to the host
            items: Optional declaration of stored items

        Returns:
            dict: Created reservation with listing/host/client summaries

        Raises:
            InvalidInputError: Bad input, own listing, inactive listing,
                outside the window or not enough space
            NotFoundError: Listing missing or deleted
        """
        space, start, end = parse_request_range(space_requested, start_date, end_date)

        listing = self.store.get_listing(listing_id)
        if not listing:
            raise NotFoundError(MESSAGES['listing_not_found'])

        if not listing['is_active']:
            raise InvalidInputError(MESSAGES['listing_inactive'])

        if not within_listing_window(listing, start, end):
            raise InvalidInputError(MESSAGES['outside_window'])

        if listing['host_id'] == client_id:
            raise InvalidInputError(MESSAGES['own_listing'])

        free = available_space(listing['bookings'], start, end, listing['space_available'])
        if free < space:
            raise InvalidInputError(MESSAGES['not_enough_space'])

        total_cost = calculate_cost(listing['price'], space, start, end)

        reservation_id = self.store.create(
            listing_id=listing_id,
            host_id=listing['host_id'],
            client_id=client_id,
            space_requested=space,
            start_date=start,
            end_date=end,
            total_cost=total_cost,
            message=message,
            items=items,
        )
        logger.info('Reservation %s requested on listing %s by user %s',
                    reservation_id, listing_id, client_id)

        self._notify(
            self.notifier.notify_host_of_new_reservation,
            listing['host_id'], client_name, listing['title'], space, start, end
        )

        return self.store.get_details(reservation_id)

    # =========================================================================
    # STATUS / RATING UPDATES
    # =========================================================================

    def update_status(self, reservation_id: int, user_id: int, status: str = None,
                      rated=None) -> dict:
        """
        Apply a status transition or set the rated flag.

        Args:
            reservation_id: Reservation ID
            user_id: Acting user (host or client of the reservation)
            status: Target status
            rated: Only True is accepted; marks the reservation rated

        Returns:
            dict: Updated reservation

        Raises:
            NotFoundError, ForbiddenError, InvalidInputError,
            InvalidTransitionError, ConflictError, RatingError
        """
        reservation = self._load(reservation_id)
        role = self._role_of(reservation, user_id)

        if status is not None:
            return self._transition(reservation, role, status)

        if rated is not None:
            if rated is not True:
                raise InvalidInputError(MESSAGES['rating_withdrawn'])
            self._check_rating(reservation, user_id)
            self.store.rate(reservation, liked=False)
            logger.info('Reservation %s marked rated by user %s', reservation_id, user_id)
            return self.store.get_details(reservation_id)

        raise InvalidInputError(MESSAGES['nothing_to_update'])

    def _transition(self, reservation: dict, role: str, status: str) -> dict:
        if status not in RESERVATION_STATUSES:
            raise InvalidInputError(MESSAGES['unknown_status'].format(status=status))

        current = reservation['status']
        transition = get_transition(current, status)
        if transition is None:
            raise InvalidTransitionError(
                MESSAGES['invalid_transition'].format(current=current, target=status))

        if role != transition.required_role:
            raise ForbiddenError(MESSAGES['role_required'].format(
                role=transition.required_role, action=STATUS_ACTIONS[status]))

        transition.execute(self.store, reservation, self.today())
        logger.info('Reservation %s: %s -> %s', reservation['id'], current, status)

        updated = self.store.get_details(reservation['id'])
        if transition.notify:
            self._notify(transition.notify, self.notifier, updated)
        return updated

    def rate(self, listing_id: int, user_id: int, reservation_id: int, liked: bool) -> dict:
        """
        Rate a listing through one of the user's reservations.

        Args:
            listing_id: Listing being rated
            user_id: Acting user, must be the reservation's client
            reservation_id: Reservation on that listing
            liked: Increment the listing's like counter

        Returns:
            dict: {'rated': True, 'liked': bool}

        Raises:
            NotFoundError: Reservation missing
            NotReservationClientError, ReservationListingMismatchError,
            ReservationNotApprovedError, AlreadyRatedError, RatingTooEarlyError
        """
        reservation = self._load(reservation_id)
        self._check_rating(reservation, user_id, listing_id=listing_id)

        self.store.rate(reservation, liked=bool(liked))
        logger.info('Listing %s rated via reservation %s (liked=%s)',
                    listing_id, reservation_id, bool(liked))
        return {'rated': True, 'liked': bool(liked)}

    def _check_rating(self, reservation: dict, user_id: int, listing_id: int = None) -> None:
        if reservation['client_id'] != user_id:
            raise NotReservationClientError()
        if listing_id is not None and reservation['listing_id'] != listing_id:
            raise ReservationListingMismatchError()
        if reservation['status'] != APPROVED:
            raise ReservationNotApprovedError()
        if reservation['rated']:
            raise AlreadyRatedError()
        if parse_iso_date(reservation['start_date']) > self.today():
            raise RatingTooEarlyError()

    # =========================================================================
    # FLAGS
    # =========================================================================

    def mark_paid(self, reservation_id: int, user_id: int) -> dict:
        """
        Record that the client paid an approved reservation.

        Raises:
            ForbiddenError: Caller is not the client
            InvalidInputError: Not APPROVED or already paid
        """
        reservation = self._load(reservation_id)
        if self._role_of(reservation, user_id) != CLIENT:
            raise ForbiddenError(MESSAGES['payment_client_only'])
        if reservation['status'] != APPROVED:
            raise InvalidInputError(MESSAGES['payment_requires_approval'])
        if reservation['payment_completed']:
            raise InvalidInputError(MESSAGES['payment_done'])

        self.store.mark_paid(reservation_id)
        logger.info('Reservation %s paid', reservation_id)
        return self.store.get_details(reservation_id)

    def clear(self, reservation_id: int, user_id: int) -> dict:
        """
        Hide a finished reservation from the caller's own list.

        Raises:
            InvalidInputError: Reservation is not in a terminal status
        """
        reservation = self._load(reservation_id)
        role = self._role_of(reservation, user_id)
        if not is_terminal(reservation['status']):
            raise InvalidInputError(MESSAGES['not_terminal'])

        self.store.clear(reservation_id, as_host=(role == HOST))
        return self.store.get_details(reservation_id)

    # =========================================================================
    # READS
    # =========================================================================

    def list_for_user(self, user_id: int, as_host: bool = False, cleared: bool = False) -> list:
        """Reservations where the user is host (as_host) or client, newest first."""
        return self.store.list_for_user(user_id, as_host, cleared)

    def get(self, reservation_id: int, user_id: int) -> dict:
        """Reservation details, visible to its host and client only."""
        reservation = self._load(reservation_id)
        self._role_of(reservation, user_id)
        return self.store.get_details(reservation_id)

    def estimate(self, listing_id: int, space, start_date, end_date) -> dict:
        """
        Preview the cost of a reservation without creating it.

        Returns:
            dict: days, total_cost, available space and whether it fits
        """
        space, start, end = parse_request_range(space, start_date, end_date)

        listing = self.store.get_listing(listing_id)
        if not listing:
            raise NotFoundError(MESSAGES['listing_not_found'])

        free = available_space(listing['bookings'], start, end, listing['space_available'])
        return {
            'listing_id': listing_id,
            'space': space,
            'start_date': start.isoformat(),
            'end_date': end.isoformat(),
            'days': calculate_days(start, end),
            'price': listing['price'],
            'total_cost': calculate_cost(listing['price'], space, start, end),
            'available_space': max(0.0, free),
            'fits': free >= space and within_listing_window(listing, start, end),
        }

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _load(self, reservation_id: int) -> dict:
        reservation = self.store.get(reservation_id)
        if not reservation:
            raise NotFoundError(MESSAGES['reservation_not_found'])
        return reservation

    @staticmethod
    def _role_of(reservation: dict, user_id: int) -> str:
        if reservation['host_id'] == user_id:
            return HOST
        if reservation['client_id'] == user_id:
            return CLIENT
        raise ForbiddenError(MESSAGES['forbidden'])

    @staticmethod
    def _notify(func, *args) -> None:
        """Run a notification; failures are logged and never raised."""
        try:
            func(*args)
        except Exception:
            logger.error('Notification %s failed', getattr(func, '__name__', func), exc_info=True)
