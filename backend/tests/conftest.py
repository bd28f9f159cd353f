"""
Pytest fixtures for Restobooks backend tests.

Provides test database setup and the Flask test client.
"""

import pytest

from restobooks import create_app
from restobooks.extensions import db


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client against a clean database."""
    return app.test_client()


@pytest.fixture(scope='function')
def rice(client):
    """Catalog item with a low-stock threshold of 5 kg."""
    response = client.post('/api/inventory/items', json={
        'name': 'Basmati Rice',
        'unit': 'kg',
        'low_stock_threshold': '5',
    })
    assert response.status_code == 201
    return response.get_json()


def post_movement(client, item_id: int, movement_type: str, quantity, **extra) -> dict:
    """Helper to record a stock movement and return the JSON body."""
    response = client.post('/api/inventory/movements', json={
        'item_id': item_id,
        'movement_type': movement_type,
        'quantity': quantity,
        **extra,
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()
