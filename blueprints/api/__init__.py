"""
JSON API package.
Split into smaller modules by concern for maintainability.
"""

from flask import Blueprint

# Create the API blueprint
api_bp = Blueprint('api', __name__)

# Import and register routes from submodules
from blueprints.api import routes
from blueprints.api import selection
from blueprints.api import availability
from blueprints.api import reservations

# Register all route functions on the blueprint
routes.register_routes(api_bp)
selection.register_routes(api_bp)
availability.register_routes(api_bp)
reservations.register_routes(api_bp)
