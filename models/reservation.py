"""
Reservation data access functions.

This module re-exports the split reservation modules so callers can import
from one place:
- reservation_state.py: Statuses, roles and the transition table
- reservation_crud.py: Create, read and transactional row writes
- reservation_queries.py: Joined reads for API payloads
- reservation_store.py: Store class used by the reservation service
"""

# State machine
from .reservation_state import (
    PENDING,
    APPROVED,
    DECLINED,
    CANCELLED,
    COMPLETED,
    RESERVATION_STATUSES,
    STATUS_ACTIONS,
    TERMINAL_STATUSES,
    HOST,
    CLIENT,
    Transition,
    TRANSITIONS,
    get_transition,
    get_valid_transitions,
    is_terminal,
)

# CRUD operations
from .reservation_crud import (
    create_reservation,
    get_reservation_by_id,
    mark_paid,
    clear_reservation,
)

# Queries
from .reservation_queries import (
    get_reservation_details,
    get_reservations_for_user,
)

# Store
from .reservation_store import ReservationStore

__all__ = [
    'PENDING', 'APPROVED', 'DECLINED', 'CANCELLED', 'COMPLETED',
    'RESERVATION_STATUSES', 'STATUS_ACTIONS', 'TERMINAL_STATUSES', 'HOST', 'CLIENT',
    'Transition', 'TRANSITIONS', 'get_transition', 'get_valid_transitions', 'is_terminal',
    'create_reservation', 'get_reservation_by_id', 'mark_paid', 'clear_reservation',
    'get_reservation_details', 'get_reservations_for_user',
    'ReservationStore',
]
