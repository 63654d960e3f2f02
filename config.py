"""
Application configuration classes.
Selected by name in create_app() or through FLASK_ENV.
"""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Config:
    """Settings shared by every environment."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # CSRF: the calendar UI sends X-CSRFToken on every POST
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False

    # Selections and reservation lists only, no uploads
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 1024 * 1024))

    # Reservation rules
    CANCELLED_STATUS = os.environ.get('CANCELLED_STATUS', 'ANNULE')
    DEFAULT_RESERVATION_STATUS = 'REQUEST'
    OPTION_MAX_HOLD_DAYS = int(os.environ.get('OPTION_MAX_HOLD_DAYS', 15))

    # Number of day columns shown by the calendar
    CALENDAR_WINDOW_DAYS = int(os.environ.get('CALENDAR_WINDOW_DAYS', 30))

    # Lodge timezone, decides what "today" is
    TIMEZONE = os.environ.get('TIMEZONE', 'Europe/Paris')

    LOG_DIR = os.environ.get('LOG_DIR') or 'logs'

    APP_NAME = 'LodgeDesk'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Local development."""

    DEBUG = True
    TESTING = False
    WTF_CSRF_SSL_STRICT = False


class ProductionConfig(Config):
    """Production behind gunicorn."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    @classmethod
    def validate(cls) -> None:
        """
        Refuse to start with an unsafe or broken production setup.

        Raises:
            ValueError: If SECRET_KEY is missing or short, the timezone is
                unknown, or the option hold length is not positive
        """
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")

        try:
            ZoneInfo(cls.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown TIMEZONE: {cls.TIMEZONE}")

        if cls.OPTION_MAX_HOLD_DAYS < 1:
            raise ValueError("OPTION_MAX_HOLD_DAYS must be at least 1")


class TestConfig(Config):
    """pytest runs."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'test-secret-key'
    CANCELLED_STATUS = 'ANNULE'
    OPTION_MAX_HOLD_DAYS = 15
    TIMEZONE = 'Europe/Paris'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
