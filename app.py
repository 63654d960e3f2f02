"""
LodgeDesk - Lodge Booking Administration
Flask application factory and initialization
"""

import json
import os
import click
import logging
from flask import Flask, redirect, url_for
from flask_wtf.csrf import CSRFError
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import csrf

from utils.api_response import api_error
from utils.calendar_days import InvalidDateError
from utils.messages import get_message
from models.slot_merge import MalformedSlotError
from models.reservation_availability import IncompleteRangeError


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

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')

    # Set default route
    @app.route('/')
    def index():
        """Redirect to the health check."""
        return redirect(url_for('api.health_check'))


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(InvalidDateError)
    def invalid_date_error(error):
        """Handle dates that are not calendar days."""
        return api_error(str(error) or get_message('invalid_date'), 400)

    @app.errorhandler(MalformedSlotError)
    def malformed_slot_error(error):
        """Handle slots without room or date."""
        return api_error(str(error) or get_message('malformed_slot'), 400)

    @app.errorhandler(IncompleteRangeError)
    def incomplete_range_error(error):
        """Handle ranges without room or dates."""
        return api_error(str(error) or get_message('incomplete_range'), 400)

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        """Handle missing or expired CSRF token."""
        return api_error(error.description, 400)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(get_message('not_found'), 404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors."""
        return api_error(get_message('method_not_allowed'), 405)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        app.logger.exception('Unhandled error: %s', error)
        return api_error(get_message('internal_error'), 500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('merge-slots')
    @click.argument('slots_file', type=click.File('r'))
    def merge_slots_command(slots_file):
        """Merge a JSON list of {room_id, date} slots into ranges."""
        from models.slot_merge import merge_consecutive_slots
        from models.reservation_dates import count_nights

        try:
            ranges = merge_consecutive_slots(json.load(slots_file))
        except (ValueError, AttributeError) as e:
            raise click.ClickException(str(e))

        for r in ranges:
            nights = count_nights(r['checkin'], r['checkout'])
            click.echo(f"{r['room_id']}: {r['checkin']} -> {r['checkout']} ({nights} nights)")
        click.echo(f'{len(ranges)} range(s)')

    @app.cli.command('check-overlaps')
    @click.argument('ranges_file', type=click.File('r'))
    def check_overlaps_command(ranges_file):
        """Validate a JSON list of {room_id, checkin, checkout} ranges."""
        from models.reservation_availability import validate_no_overlaps
        from models.reservation_dates import validate_reservation_dates

        try:
            ranges = json.load(ranges_file)
            for r in ranges:
                ordering = validate_reservation_dates(r['checkin'], r['checkout'])
                if not ordering['valid']:
                    raise click.ClickException(f"Room {r['room_id']}: {ordering['error']}")
            result = validate_no_overlaps(ranges)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise click.ClickException(str(e))

        if not result['valid']:
            raise click.ClickException(result['error'])
        click.echo('No overlapping reservations')


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        log_dir = app.config.get('LOG_DIR', 'logs')
        if not os.path.exists(log_dir):
            os.mkdir(log_dir)

        file_handler = logging.FileHandler(os.path.join(log_dir, 'lodgedesk.log'))
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('LodgeDesk startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
