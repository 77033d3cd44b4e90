"""
Shortlist Service - listings a client saved while searching.
"""

import logging
from typing import Any, Dict, List

from blueprints.market.services.listing_service import format_listing
from models import listing as listing_model
from models import shortlist as shortlist_model
from utils.errors import InvalidInputError, NotFoundError
from utils.messages import MESSAGES

logger = logging.getLogger(__name__)

SHORTLIST_ACTIONS = ('add', 'remove', 'toggle')


class ShortlistService:
    """Per-user shortlist on top of models.shortlist."""

    def get(self, user_id: int) -> List[Dict[str, Any]]:
        """Shortlisted listings that are still active, oldest entry first."""
        return [format_listing(l) for l in shortlist_model.get_shortlisted_listings(user_id)]

    def update(self, user_id: int, listing_id: int, action: str = 'toggle') -> Dict[str, Any]:
        """
        Add, remove or toggle one listing on the user's shortlist.

        Args:
            user_id: Shortlist owner
            listing_id: Listing to add or remove
            action: One of SHORTLIST_ACTIONS

        Returns:
            dict: {'listing_ids': [...], 'shortlisted': bool}

        Raises:
            InvalidInputError: Unknown action
            NotFoundError: Adding a missing or deleted listing
        """
        if action not in SHORTLIST_ACTIONS:
            raise InvalidInputError(MESSAGES['invalid_shortlist_action'].format(
                actions=', '.join(SHORTLIST_ACTIONS)))

        if action == 'toggle':
            action = 'remove' if shortlist_model.is_shortlisted(user_id, listing_id) else 'add'

        if action == 'add':
            if not listing_model.get_listing_by_id(listing_id):
                raise NotFoundError(MESSAGES['listing_not_found'])
            if shortlist_model.add_to_shortlist(user_id, listing_id):
                logger.info('Listing %s shortlisted by user %s', listing_id, user_id)
        else:
            shortlist_model.remove_from_shortlist(user_id, listing_id)

        return {
            'listing_ids': shortlist_model.get_shortlist_ids(user_id),
            'shortlisted': action == 'add',
        }
