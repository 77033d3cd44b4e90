"""
API routes for JSON endpoints that do not belong to a domain blueprint.
"""

from flask import jsonify, current_app, Blueprint

from database import get_db

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status, version and database reachability
    """
    try:
        get_db().execute('SELECT 1').fetchone()
        database = 'ok'
    except Exception:
        current_app.logger.exception('Health check database query failed')
        database = 'error'

    status = 200 if database == 'ok' else 503
    return jsonify({
        'status': 'ok' if status == 200 else 'degraded',
        'database': database,
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'SpaceShare')
    }), status
