"""
Centralized user-facing messages.
All API text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'Signed out',
    'user_created': 'Account created',
    'listing_created': 'Listing created',
    'listing_updated': 'Listing updated',
    'listing_deleted': 'Listing deactivated',
    'reservation_created': 'Reservation requested',
    'reservation_updated': 'Reservation updated',
    'reservation_cleared': 'Reservation cleared',
    'reservation_paid': 'Payment recorded',
    'rating_recorded': 'Thanks for your feedback',
    'shortlist_updated': 'Shortlist updated',

    # Error messages
    'invalid_shortlist_action': 'action must be one of: {actions}',
    'invalid_credentials': 'Invalid email or password',
    'account_disabled': 'This account has been disabled',
    'email_exists': 'An account with this email already exists',
    'listing_not_found': 'Listing not found',
    'reservation_not_found': 'Reservation not found',
    'forbidden': 'Forbidden',
    'own_listing': 'Cannot reserve your own listing',
    'listing_inactive': 'Listing is not accepting reservations',
    'outside_window': 'Requested dates are outside the listing availability window',
    'not_enough_space': 'Not enough space available',
    'approval_conflict': ('Not enough space available. Another reservation may have been '
                          'approved for overlapping dates.'),
    'concurrent_update': 'Reservation was modified by another request, please reload',
    'invalid_transition': 'Cannot transition from {current} to {target}',
    'not_ended': 'Cannot complete reservation before end date',
    'role_required': 'Only the {role} can {action} this reservation',
    'unknown_status': 'Unknown reservation status: {status}',
    'invalid_date_range': 'End date must be after start date',
    'invalid_date': 'Invalid date: {value}',
    'invalid_space': 'Space must be positive',
    'nothing_to_update': 'Nothing to update',
    'rating_withdrawn': 'A rating cannot be withdrawn',
    'not_terminal': 'Only completed, cancelled, or declined reservations can be cleared',
    'payment_requires_approval': 'Only approved reservations can be paid',
    'payment_client_only': 'Only the client can pay for this reservation',
    'payment_done': 'Payment already recorded',
    'dates_required': 'start_date and end_date required',
}
