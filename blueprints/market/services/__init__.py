"""
Marketplace services - business logic between routes and models.
"""

from blueprints.market.services.listing_service import ListingService
from blueprints.market.services.notification_service import LogChannel, NotificationService
from blueprints.market.services.reservation_service import ReservationService
from blueprints.market.services.shortlist_service import ShortlistService

__all__ = ['ListingService', 'LogChannel', 'NotificationService', 'ReservationService', 'ShortlistService']
