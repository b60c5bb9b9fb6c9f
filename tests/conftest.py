"""
Shared pytest fixtures.

Every test gets a fresh application bound to its own in-memory SQLite
database, so nothing leaks between tests.
"""

import pytest

from app import create_app
from models.db import db


# Fixtures

@pytest.fixture
def app():
    """Create an application in testing mode with an empty schema."""
    app = create_app("config.TestingConfig")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    """Push an application context for service-level tests."""
    with app.app_context():
        yield app


@pytest.fixture
def seeded_client(app, client):
    """Test client over the default catalog (A4 0.50, Color 0.15, Flex Banner 2.00, ...)."""
    with app.app_context():
        app.config["CATALOG_SERVICE"].seed_defaults()
    return client


@pytest.fixture
def price_of(seeded_client):
    """Look up a seeded catalog entry by category and exact name."""
    def _lookup(category, name):
        entries = seeded_client.get("/api/price-lists").get_json()
        return next(e for e in entries if e["category"] == category and e["serviceName"] == name)
    return _lookup
