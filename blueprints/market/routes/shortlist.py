"""
Shortlist API routes: saved listings of the current user.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.market.services.shortlist_service import ShortlistService
from utils.api_response import api_success
from utils.errors import InvalidInputError
from utils.messages import MESSAGES


def register_routes(bp):
    """Register shortlist routes on the blueprint."""

    @bp.route('/shortlist')
    @login_required
    def shortlist_list():
        """Active listings on the current user's shortlist."""
        return api_success(data=ShortlistService().get(current_user.id))

    @bp.route('/shortlist', methods=['POST'])
    @login_required
    def shortlist_update():
        """
        Change the current user's shortlist.

        Body: {"listing_id": int, "action": "add" | "remove" | "toggle"}
        """
        payload = request.get_json(silent=True) or {}
        listing_id = payload.get('listing_id')
        if not isinstance(listing_id, int) or isinstance(listing_id, bool):
            raise InvalidInputError('listing_id is required')

        result = ShortlistService().update(
            current_user.id, listing_id, payload.get('action') or 'toggle'
        )
        return api_success(data=result, message=MESSAGES['shortlist_updated'])
