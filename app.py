"""
SpaceShare - Storage Space Rental Marketplace
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db

from utils.api_response import api_error
from utils.errors import ApiError


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    config_class = config.get(config_name, config['default'])
    if config_name == 'production':
        config_class.validate()

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.market import market_bp
    from blueprints.api.routes import api_bp

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(market_bp, url_prefix='/market')
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        """Service banner."""
        from utils.api_response import api_success

        return api_success(data={
            'app': app.config.get('APP_NAME', 'SpaceShare'),
            'version': app.config.get('APP_VERSION', '1.0.0')
        })


def register_error_handlers(app):
    """Register error handlers."""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        """Render typed domain errors with their status and code."""
        if error.status_code >= 500:
            app.logger.error('API error: %s', error.message, exc_info=True)
        return api_error(error.message, status=error.status_code, code=error.code)

    @app.errorhandler(400)
    def bad_request_error(error):
        """Handle 400 errors (malformed JSON, CSRF failures)."""
        return api_error(getattr(error, 'description', 'Bad request'), status=400, code='bad_request')

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error('Not found', status=404, code='not_found')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error('Method not allowed', status=405, code='method_not_allowed')

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error('Unhandled error: %s', error, exc_info=True)
        return api_error('Internal server error', status=500, code='internal_error')


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    @click.option('--no-seed', is_flag=True, help='Create the schema without demo data.')
    def init_db_command(no_seed):
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db(seed=not no_seed)
        click.echo('Database initialized successfully!')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.argument('first_name')
    @click.option('--last-name', default='', help='Family name.')
    @click.password_option()
    def create_user_command(email, first_name, last_name, password):
        """Create a new user."""
        import sqlite3
        from models.user import create_user
        from utils.validators import validate_email, validate_password

        if not validate_email(email):
            click.echo('Error creating user: invalid email', err=True)
            return

        is_valid, error = validate_password(password, min_length=8)
        if not is_valid:
            click.echo(f'Error creating user: {error}', err=True)
            return

        with app.app_context():
            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except sqlite3.IntegrityError as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/spaceshare.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)

        # Module loggers (logging.getLogger(__name__)) propagate to root
        root = logging.getLogger()
        root.addHandler(file_handler)
        root.setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('SpaceShare startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)
        logging.basicConfig(level=logging.INFO)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
