"""
Pytest configuration and fixtures.
"""

import os
import pytest


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['FLASK_ENV'] = 'test'
    yield


@pytest.fixture
def app():
    """Create test application."""
    from app import create_app

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def existing_reservations():
    """Reservations as returned by the reservation store."""
    return [
        {'id': 'res-1', 'room_id': 'R1', 'date_checkin': '2026-03-01',
         'date_checkout': '2026-03-04', 'status': 'RESERVE'},
        {'id': 'res-2', 'room_id': 'R1', 'date_checkin': '2026-03-10',
         'date_checkout': '2026-03-12', 'status': 'CONFIRME'},
        {'id': 'res-3', 'room_id': 'R1', 'date_checkin': '2026-03-05',
         'date_checkout': '2026-03-08', 'status': 'ANNULE'},
        {'id': 'res-4', 'room_id': 'R2', 'date_checkin': '2026-03-01',
         'date_checkout': '2026-03-20', 'status': 'OPTION'},
    ]
