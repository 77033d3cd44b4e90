"""
Reservation API routes: create, list, status changes, payment and clearing.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.market.forms import ReservationForm
from blueprints.market.services.reservation_service import ReservationService
from utils.api_response import api_success, bind_json_form, form_error
from utils.errors import InvalidInputError
from utils.helpers import parse_bool
from utils.messages import MESSAGES


def register_routes(bp):
    """Register reservation routes on the blueprint."""

    # ============================================================================
    # LIST / CREATE
    # ============================================================================

    @bp.route('/reservations')
    @login_required
    def reservations_list():
        """
        List the current user's reservations.

        Query params:
            as_host: true for reservations on the user's listings
            cleared: true for reservations the user has cleared
        """
        reservations = ReservationService().list_for_user(
            current_user.id,
            as_host=parse_bool(request.args.get('as_host')),
            cleared=parse_bool(request.args.get('cleared')),
        )
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/reservations', methods=['POST'])
    @login_required
    def reservations_create():
        """Request space on a listing."""
        payload = request.get_json(silent=True) or {}
        form = bind_json_form(ReservationForm, payload)
        if not form.validate():
            return form_error(form)

        reservation = ReservationService().create(
            listing_id=form.listing_id.data,
            client_id=current_user.id,
            client_name=current_user.full_name,
            space_requested=form.space_requested.data,
            start_date=form.start_date.date,
            end_date=form.end_date.date,
            message=form.message.data or None,
            items=payload.get('items'),
        )
        return api_success(data=reservation, message=MESSAGES['reservation_created'], status=201)

    # ============================================================================
    # SINGLE RESERVATION
    # ============================================================================

    @bp.route('/reservations/<int:reservation_id>')
    @login_required
    def reservations_detail(reservation_id):
        """Get one reservation (host or client only)."""
        return api_success(data=ReservationService().get(reservation_id, current_user.id))

    @bp.route('/reservations/<int:reservation_id>', methods=['PATCH'])
    @login_required
    def reservations_update(reservation_id):
        """
        Change status or mark rated.

        Body: {"status": "APPROVED"} or {"rated": true}
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise InvalidInputError(MESSAGES['nothing_to_update'])

        status = payload.get('status')
        if status is not None and not isinstance(status, str):
            raise InvalidInputError(MESSAGES['unknown_status'].format(status=status))

        reservation = ReservationService().update_status(
            reservation_id,
            current_user.id,
            status=status.upper() if status else None,
            rated=payload.get('rated'),
        )
        return api_success(data=reservation, message=MESSAGES['reservation_updated'])

    @bp.route('/reservations/<int:reservation_id>/pay', methods=['POST'])
    @login_required
    def reservations_pay(reservation_id):
        """Record payment of an approved reservation."""
        reservation = ReservationService().mark_paid(reservation_id, current_user.id)
        return api_success(data=reservation, message=MESSAGES['reservation_paid'])

    @bp.route('/reservations/<int:reservation_id>/clear', methods=['POST'])
    @login_required
    def reservations_clear(reservation_id):
        """Hide a finished reservation from the current user's list."""
        reservation = ReservationService().clear(reservation_id, current_user.id)
        return api_success(data=reservation, message=MESSAGES['reservation_cleared'])
