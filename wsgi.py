"""
WSGI entry point for production deployment.

    gunicorn -c gunicorn.conf.py wsgi:application
"""
import os
from app import create_app

config_name = os.environ.get('FLASK_ENV', 'production')
application = create_app(config_name)
