"""
Listing API routes: search, CRUD, availability, cost estimates and rating.
"""

import math

from flask import request
from flask_login import login_required, current_user

from blueprints.market.forms import ListingForm, ListingUpdateForm
from blueprints.market.services.listing_service import ListingService, SORT_OPTIONS
from blueprints.market.services.reservation_service import ReservationService
from utils.api_response import api_success, bind_json_form, form_error
from utils.errors import InvalidInputError
from utils.helpers import parse_bool
from utils.messages import MESSAGES
from utils.validators import validate_coordinates

# Fields a PATCH may set back to null
NULLABLE_FIELDS = ('latitude', 'longitude', 'available_from', 'available_to', 'description')


def _float_arg(name):
    value = request.args.get(name)
    if value in (None, ''):
        return None
    try:
        number = float(value)
    except ValueError:
        raise InvalidInputError(f'{name} must be a number')
    if not math.isfinite(number):
        raise InvalidInputError(f'{name} must be a number')
    return number


def register_routes(bp):
    """Register listing routes on the blueprint."""

    # ============================================================================
    # SEARCH / CREATE
    # ============================================================================

    @bp.route('/listings')
    @login_required
    def listings_search():
        """
        Search other hosts' listings, or list your own with ?host=me.

        Query params:
            lat, lng, radius: Distance filter (km)
            start_date, end_date, space: Availability filter
            sort_by: One of SORT_OPTIONS (default NEWEST)
        """
        service = ListingService()

        if request.args.get('host') == 'me':
            listings = service.for_host(current_user.id)
            return api_success(data=listings, count=len(listings))

        sort_by = (request.args.get('sort_by') or 'NEWEST').upper()
        if sort_by not in SORT_OPTIONS:
            raise InvalidInputError(f'sort_by must be one of {", ".join(SORT_OPTIONS)}')

        filters = {
            'lat': _float_arg('lat'),
            'lng': _float_arg('lng'),
            'radius': _float_arg('radius'),
            'start_date': request.args.get('start_date'),
            'end_date': request.args.get('end_date'),
            'space': _float_arg('space'),
            'sort_by': sort_by,
        }
        if (filters['lat'] is not None or filters['lng'] is not None) and \
                not validate_coordinates(filters['lat'], filters['lng']):
            raise InvalidInputError('lat and lng must be valid coordinates')

        listings = service.search(current_user.id, filters)
        return api_success(data=listings, count=len(listings))

    @bp.route('/listings', methods=['POST'])
    @login_required
    def listings_create():
        """Create a listing owned by the current user."""
        form = bind_json_form(ListingForm)
        if not form.validate():
            return form_error(form)

        listing = ListingService().create(current_user.id, form.listing_data())
        return api_success(data=listing, message=MESSAGES['listing_created'], status=201)

    @bp.route('/listings/price-recommendation')
    @login_required
    def listings_price_recommendation():
        """Average price of nearby listings. Query params: lat, lng."""
        lat = _float_arg('lat')
        lng = _float_arg('lng')
        if not validate_coordinates(lat, lng):
            raise InvalidInputError('lat and lng must be valid coordinates')
        return api_success(data=ListingService().price_recommendation(lat, lng, current_user.id))

    # ============================================================================
    # SINGLE LISTING
    # ============================================================================

    @bp.route('/listings/<int:listing_id>')
    @login_required
    def listings_detail(listing_id):
        """Get a listing."""
        return api_success(data=ListingService().get(listing_id))

    @bp.route('/listings/<int:listing_id>', methods=['PATCH'])
    @login_required
    def listings_update(listing_id):
        """Update some fields of a listing (host only)."""
        payload = request.get_json(silent=True) or {}
        form = bind_json_form(ListingUpdateForm, payload)
        if not form.validate():
            return form_error(form)

        present = {k for k, v in payload.items() if v is not None or k in NULLABLE_FIELDS}
        if not present:
            raise InvalidInputError(MESSAGES['nothing_to_update'])

        listing = ListingService().update(listing_id, current_user.id, form.listing_data(present))
        return api_success(data=listing, message=MESSAGES['listing_updated'])

    @bp.route('/listings/<int:listing_id>', methods=['DELETE'])
    @login_required
    def listings_delete(listing_id):
        """Soft delete a listing (host only)."""
        result = ListingService().delete(listing_id, current_user.id)
        return api_success(data=result, message=MESSAGES['listing_deleted'])

    # ============================================================================
    # AVAILABILITY / ESTIMATE / RATING
    # ============================================================================

    @bp.route('/listings/<int:listing_id>/availability')
    @login_required
    def listings_availability(listing_id):
        """Per-day free space. Query params: start_date, end_date (inclusive)."""
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')
        if not start_date or not end_date:
            raise InvalidInputError(MESSAGES['dates_required'])

        days = ListingService().availability(listing_id, start_date, end_date)
        return api_success(data=days)

    @bp.route('/listings/<int:listing_id>/estimate')
    @login_required
    def listings_estimate(listing_id):
        """Cost preview. Query params: space, start_date, end_date."""
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')
        if not start_date or not end_date:
            raise InvalidInputError(MESSAGES['dates_required'])

        estimate = ReservationService().estimate(
            listing_id, request.args.get('space'), start_date, end_date
        )
        return api_success(data=estimate)

    @bp.route('/listings/<int:listing_id>/rate', methods=['POST'])
    @login_required
    def listings_rate(listing_id):
        """
        Rate a listing through an approved, started reservation.

        Body: {"reservation_id": int, "liked": bool}
        """
        payload = request.get_json(silent=True) or {}
        reservation_id = payload.get('reservation_id')
        if not isinstance(reservation_id, int) or isinstance(reservation_id, bool):
            raise InvalidInputError('reservation_id is required')

        result = ReservationService().rate(
            listing_id, current_user.id, reservation_id, parse_bool(payload.get('liked'))
        )
        return api_success(data=result, message=MESSAGES['rating_recorded'])
