"""
Typed application errors.

Every error carries an HTTP-like status code and a short machine code, so
the API layer can render it without knowing where it was raised:

    NotFoundError            404  missing listing/reservation
    ForbiddenError           403  wrong role or not a party to the reservation
    InvalidInputError        400  malformed dates, non-positive space, no room
    InvalidTransitionError   400  no (from, to) entry in the transition table
    ConflictError            409  availability re-check failed at commit time
    RatingError              400  rating preconditions (one subclass each)
"""


class ApiError(Exception):
    """Base class for errors that map to an API response."""

    status_code = 500
    code = 'error'

    def __init__(self, message: str = None, status_code: int = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'error': self.message, 'code': self.code}


class NotFoundError(ApiError):
    """Resource not found."""

    status_code = 404
    code = 'not_found'


class ForbiddenError(ApiError):
    """Forbidden."""

    status_code = 403
    code = 'forbidden'


class InvalidInputError(ApiError):
    """Invalid input."""

    status_code = 400
    code = 'invalid_input'


class InvalidTransitionError(ApiError):
    """Invalid status transition."""

    status_code = 400
    code = 'invalid_transition'


class PrematureCompletionError(InvalidTransitionError):
    """Cannot complete reservation before end date."""

    code = 'not_ended'


class ConflictError(ApiError):
    """Not enough space available."""

    status_code = 409
    code = 'conflict'


# =============================================================================
# RATING PRECONDITIONS
# =============================================================================

class RatingError(ApiError):
    """Reservation cannot be rated."""

    status_code = 400
    code = 'invalid_rating_state'


class NotReservationClientError(RatingError):
    """Only the client can rate."""

    status_code = 403
    code = 'not_client'


class ReservationListingMismatchError(RatingError):
    """Reservation does not match listing."""

    code = 'listing_mismatch'


class ReservationNotApprovedError(RatingError):
    """Reservation must be approved to rate."""

    code = 'not_approved'


class AlreadyRatedError(RatingError):
    """Already rated."""

    code = 'already_rated'


class RatingTooEarlyError(RatingError):
    """Cannot rate before start date."""

    code = 'not_started'
