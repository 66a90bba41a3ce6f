"""Pytest configuration and fixtures for API and service tests."""

import os
import sys

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app  # noqa: E402
from models import db, Ingredient, Recipe, RecipeIngredient, Order, OrderLine  # noqa: E402


@pytest.fixture(scope="function")
def app():
    """
    Provide an app bound to a clean in-memory database for each test.

    The app context stays pushed for the whole test so tests can query
    the database directly alongside client requests.
    """
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def row_counts(app):
    """Return a callable giving current row counts for every table."""
    def counts():
        result = {
            'ingredient': db.session.query(Ingredient).count(),
            'recipe': db.session.query(Recipe).count(),
            'recipe_ingredient': db.session.query(RecipeIngredient).count(),
            'order': db.session.query(Order).count(),
            'order_line': db.session.query(OrderLine).count(),
        }
        db.session.rollback()
        return result
    return counts


@pytest.fixture
def sugar(client):
    """Sugar at $3.49 for 500 g, created through the API."""
    response = client.post('/ingredients', json={
        'name': 'Sugar',
        'price': 3.49,
        'store': 'Grocery Store',
        'measurement_value': 500,
        'measurement_type': 'g',
    })
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def flour(client):
    """Flour at $2.99 for 1000 g."""
    response = client.post('/ingredients', json={
        'name': 'Flour',
        'price': '2.99',
        'measurement_value': '1000',
        'measurement_type': 'g',
    })
    assert response.status_code == 201
    return response.get_json()
