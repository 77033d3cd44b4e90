"""
Reservation status state machine.

Legal moves live in TRANSITIONS, keyed by (from_status, to_status). Each
entry names the party allowed to trigger it, the side effect to run against
the reservation store and the notification to send afterwards. Any pair not
in the table is illegal regardless of who asks.
"""

from models.availability import available_space
from utils.errors import ConflictError, PrematureCompletionError
from utils.messages import MESSAGES
from utils.validators import parse_iso_date


# =============================================================================
# CONSTANTS
# =============================================================================

PENDING = 'PENDING'
APPROVED = 'APPROVED'
DECLINED = 'DECLINED'
CANCELLED = 'CANCELLED'
COMPLETED = 'COMPLETED'

RESERVATION_STATUSES = [PENDING, APPROVED, DECLINED, CANCELLED, COMPLETED]
TERMINAL_STATUSES = frozenset({DECLINED, CANCELLED, COMPLETED})

HOST = 'host'
CLIENT = 'client'

# Verb used in "Only the host can approve this reservation"
STATUS_ACTIONS = {
    APPROVED: 'approve',
    DECLINED: 'decline',
    CANCELLED: 'cancel',
    COMPLETED: 'complete',
}


class Transition:
    """
    One legal status move.

    Attributes:
        required_role: HOST or CLIENT
        execute: callable(store, reservation, today) performing the writes
        notify: optional callable(notifier, reservation) run after commit
    """

    def __init__(self, required_role: str, execute, notify=None):
        self.required_role = required_role
        self.execute = execute
        self.notify = notify

    def __repr__(self):
        return f'<Transition role={self.required_role} execute={self.execute.__name__}>'


# =============================================================================
# SIDE EFFECTS
# =============================================================================

def _approve(store, reservation: dict, today) -> None:
    """Re-check space under the write lock, then book and approve."""

    def ensure_space(bookings: list, total_space: float) -> None:
        free = available_space(
            bookings, reservation['start_date'], reservation['end_date'], total_space
        )
        if free < float(reservation['space_requested']):
            raise ConflictError(MESSAGES['approval_conflict'])

    store.approve(reservation, ensure_space)


def _decline(store, reservation: dict, today) -> None:
    store.set_status(reservation, DECLINED)


def _cancel_pending(store, reservation: dict, today) -> None:
    # Nothing was booked yet
    store.set_status(reservation, CANCELLED)


def _cancel_approved(store, reservation: dict, today) -> None:
    store.cancel_with_booking(reservation)


def _complete(store, reservation: dict, today) -> None:
    if parse_iso_date(reservation['end_date']) > today:
        raise PrematureCompletionError(MESSAGES['not_ended'])
    store.set_status(reservation, COMPLETED)


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def _notify_client(notifier, reservation: dict) -> None:
    notifier.notify_client_of_status_change(
        reservation['client_id'],
        reservation['listing']['title'],
        reservation['status'],
        reservation['start_date'],
        reservation['end_date'],
    )


def _notify_host_of_cancellation(notifier, reservation: dict) -> None:
    notifier.notify_host_of_cancellation(
        reservation['host_id'],
        reservation['client_id'],
        reservation['listing']['title'],
        reservation['start_date'],
        reservation['end_date'],
    )


TRANSITIONS = {
    (PENDING, APPROVED): Transition(HOST, _approve, _notify_client),
    (PENDING, DECLINED): Transition(HOST, _decline, _notify_client),
    (PENDING, CANCELLED): Transition(CLIENT, _cancel_pending, _notify_host_of_cancellation),
    (APPROVED, CANCELLED): Transition(CLIENT, _cancel_approved, _notify_host_of_cancellation),
    (APPROVED, COMPLETED): Transition(HOST, _complete),
}


# =============================================================================
# LOOKUPS
# =============================================================================

def get_transition(from_status: str, to_status: str):
    """
    Look up a legal transition.

    Args:
        from_status: Current status
        to_status: Requested status

    Returns:
        Transition or None if the move is illegal
    """
    return TRANSITIONS.get((from_status, to_status))


def get_valid_transitions(from_status: str) -> list:
    """Statuses reachable from from_status, in RESERVATION_STATUSES order."""
    return [to for to in RESERVATION_STATUSES if (from_status, to) in TRANSITIONS]


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES
