"""
Listing Service - business logic for hosts' listings and client search.

Handles:
- Listing CRUD with host ownership checks
- Soft delete with reservation/booking cascade
- Per-day availability
- Search by distance, dates and space with sort options
- Nearby price recommendation
"""

import logging
from typing import Any, Dict, List, Optional

from flask import current_app, has_app_context

from models import listing as listing_model
from models.availability import available_space, daily_availability
from models.pricing import round_half_up
from utils.errors import ForbiddenError, InvalidInputError, NotFoundError
from utils.geo import calculate_distance_km
from utils.helpers import serialize_row
from utils.messages import MESSAGES
from utils.validators import parse_iso_date

logger = logging.getLogger(__name__)

SORT_OPTIONS = ('NEWEST', 'OLDEST', 'CHEAPEST', 'MOST_EXPENSIVE',
                'LARGEST', 'SMALLEST', 'MOST_LIKED', 'CLOSEST')

PRICE_RECOMMENDATION_RADIUS_KM = 5.0

_SORT_KEYS = {
    'NEWEST': (lambda l: (str(l['created_at']), l['id']), True),
    'OLDEST': (lambda l: (str(l['created_at']), l['id']), False),
    'CHEAPEST': (lambda l: l['price'], False),
    'MOST_EXPENSIVE': (lambda l: l['price'], True),
    'LARGEST': (lambda l: l['space_available'], True),
    'SMALLEST': (lambda l: l['space_available'], False),
    'MOST_LIKED': (lambda l: l['likes'] or 0, True),
    'CLOSEST': (lambda l: l['distance_km'] if l.get('distance_km') is not None else float('inf'), False),
}


def format_listing(listing: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-friendly listing dict (bookings and internal columns dropped)."""
    data = {k: v for k, v in listing.items() if k not in ('bookings', 'deleted_at')}
    return serialize_row(data, bool_fields=('is_active',))


def sort_listings(listings: List[Dict[str, Any]], sort_by: str = 'NEWEST') -> List[Dict[str, Any]]:
    """
    Sort listings by one of SORT_OPTIONS.

    Args:
        listings: Listing dicts (CLOSEST expects 'distance_km')
        sort_by: Sort option, NEWEST when unknown

    Returns:
        New sorted list
    """
    key, reverse = _SORT_KEYS.get(sort_by, _SORT_KEYS['NEWEST'])
    return sorted(listings, key=key, reverse=reverse)


class ListingService:
    """Listing use cases on top of models.listing."""

    # =========================================================================
    # READ
    # =========================================================================

    def get(self, listing_id: int) -> Dict[str, Any]:
        """
        Get a non-deleted listing.

        Raises:
            NotFoundError: Missing or soft-deleted
        """
        listing = listing_model.get_listing_by_id(listing_id)
        if not listing:
            raise NotFoundError(MESSAGES['listing_not_found'])
        return format_listing(listing)

    def for_host(self, host_id: int) -> List[Dict[str, Any]]:
        """The host's non-deleted listings, newest first."""
        return [format_listing(l) for l in listing_model.get_listings_by_host(host_id)]

    def availability(self, listing_id: int, start_date, end_date) -> List[Dict[str, Any]]:
        """
        Per-day free space from start_date to end_date inclusive.

        Raises:
            InvalidInputError: Missing/invalid dates or end before start
            NotFoundError: Listing missing or deleted
        """
        try:
            start = parse_iso_date(start_date)
            end = parse_iso_date(end_date)
        except ValueError:
            raise InvalidInputError(MESSAGES['dates_required'])
        if end < start:
            raise InvalidInputError(MESSAGES['invalid_date_range'])

        listing = listing_model.get_listing_with_bookings(listing_id)
        if not listing:
            raise NotFoundError(MESSAGES['listing_not_found'])

        return daily_availability(listing['bookings'], start, end, listing['space_available'])

    # =========================================================================
    # SEARCH
    # =========================================================================

    def search(self, user_id: Optional[int], filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Search active listings of other hosts.

        Args:
            user_id: Searching user; their own listings are excluded
            filters: Optional keys lat, lng, radius (km), start_date, end_date,
                space, sort_by

        Returns:
            List of listing dicts; 'distance_km' is set when lat/lng are given
        """
        listings = listing_model.get_active_listings(exclude_host_id=user_id)

        lat = filters.get('lat')
        lng = filters.get('lng')
        if lat is not None and lng is not None:
            radius = filters.get('radius')
            if radius is None and has_app_context():
                radius = current_app.config.get('SEARCH_DEFAULT_RADIUS_KM')

            nearby = []
            for listing in listings:
                if listing['latitude'] is None or listing['longitude'] is None:
                    continue
                distance = calculate_distance_km(lat, lng, listing['latitude'], listing['longitude'])
                listing['distance_km'] = round_half_up(distance, 2)
                if radius is None or distance <= radius:
                    nearby.append(listing)
            listings = nearby

        start_date = filters.get('start_date')
        end_date = filters.get('end_date')
        space = filters.get('space')
        if start_date and end_date:
            try:
                start = parse_iso_date(start_date)
                end = parse_iso_date(end_date)
            except ValueError:
                raise InvalidInputError(MESSAGES['invalid_date'].format(value=f'{start_date} / {end_date}'))
            if end <= start:
                raise InvalidInputError(MESSAGES['invalid_date_range'])

            listings = [
                listing for listing in listings
                if self._fits(listing, start, end, float(space or 0))
            ]

        listings = sort_listings(listings, (filters.get('sort_by') or 'NEWEST').upper())
        return [format_listing(l) for l in listings]

    @staticmethod
    def _fits(listing: Dict[str, Any], start, end, space: float) -> bool:
        if listing.get('available_from') and parse_iso_date(listing['available_from']) > start:
            return False
        if listing.get('available_to') and parse_iso_date(listing['available_to']) < end:
            return False
        free = available_space(listing['bookings'], start, end, listing['space_available'])
        return free >= space and free > 0

    def price_recommendation(self, lat: float, lng: float, user_id: Optional[int]) -> Dict[str, Any]:
        """
        Average price of other hosts' active listings within 5 km.

        Returns:
            {'recommended_price': float, 'count': int}
        """
        prices = [
            listing['price']
            for listing in listing_model.get_active_listings(exclude_host_id=user_id)
            if listing['latitude'] is not None and listing['longitude'] is not None
            and calculate_distance_km(lat, lng, listing['latitude'], listing['longitude'])
            <= PRICE_RECOMMENDATION_RADIUS_KM
        ]
        if not prices:
            return {'recommended_price': 0, 'count': 0}
        return {
            'recommended_price': round_half_up(sum(prices) / len(prices), 2),
            'count': len(prices),
        }

    # =========================================================================
    # WRITE
    # =========================================================================

    def create(self, host_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a listing owned by host_id.

        Args:
            host_id: Owner
            data: title, price, space_available and optional description,
                latitude, longitude, available_from, available_to

        Returns:
            dict: Created listing
        """
        self._check_window(data.get('available_from'), data.get('available_to'))
        listing_id = listing_model.create_listing(
            host_id=host_id,
            title=data['title'],
            price=data['price'],
            space_available=data['space_available'],
            description=data.get('description') or '',
            latitude=data.get('latitude'),
            longitude=data.get('longitude'),
            available_from=data.get('available_from'),
            available_to=data.get('available_to'),
        )
        logger.info('Listing %s created by host %s', listing_id, host_id)
        return self.get(listing_id)

    def update(self, listing_id: int, user_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a listing owned by user_id.

        Raises:
            ForbiddenError: Missing listing or not the host
        """
        listing = self._owned(listing_id, user_id)

        self._check_window(
            data.get('available_from', listing.get('available_from')),
            data.get('available_to', listing.get('available_to')),
        )
        fields = {k: v for k, v in data.items() if k in listing_model.LISTING_FIELDS}
        if 'is_active' in fields:
            fields['is_active'] = 1 if fields['is_active'] else 0
        listing_model.update_listing(listing_id, **fields)
        return self.get(listing_id)

    def delete(self, listing_id: int, user_id: int) -> Dict[str, Any]:
        """
        Soft delete a listing and release its reservations.

        Raises:
            ForbiddenError: Missing listing or not the host
        """
        self._owned(listing_id, user_id)
        result = listing_model.soft_delete_listing(listing_id)
        return {'message': MESSAGES['listing_deleted'], **result}

    @staticmethod
    def _owned(listing_id: int, user_id: int) -> Dict[str, Any]:
        listing = listing_model.get_listing_by_id(listing_id)
        if not listing or listing['host_id'] != user_id:
            raise ForbiddenError(MESSAGES['forbidden'])
        return listing

    @staticmethod
    def _check_window(available_from, available_to) -> None:
        if available_from and available_to:
            if parse_iso_date(available_to) < parse_iso_date(available_from):
                raise InvalidInputError(MESSAGES['invalid_date_range'])
