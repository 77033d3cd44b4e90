"""
Marketplace blueprint initialization.
Registers listing and reservation JSON routes.

Route logic lives in:
- routes/listings.py - Listing CRUD, search, availability, estimates, rating
- routes/reservations.py - Reservation lifecycle
- routes/shortlist.py - Saved listings
"""

from flask import Blueprint

market_bp = Blueprint('market', __name__)

from blueprints.market.routes import listings, reservations, shortlist  # noqa: E402

listings.register_routes(market_bp)
reservations.register_routes(market_bp)
shortlist.register_routes(market_bp)
