"""
Pytest fixtures for the police ID service.

Every test gets its own SQLite file, so the schema is built by the real
migrations and tests never share state.
"""

import pytest

from police_id import create_app, db


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'police_test.db'}",
        'PUBLIC_BASE_URL': 'https://id.example.test',
        'ID_NUMBER_PREFIX': 'BGR-POL',
    })

    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def members(app):
    return app.extensions['police_id']['members']


@pytest.fixture(scope='function')
def scans(app):
    return app.extensions['police_id']['scans']


@pytest.fixture(scope='function')
def stats(app):
    return app.extensions['police_id']['stats']


@pytest.fixture
def officer():
    """Registration fields for one officer."""
    return {
        'full_name': 'Abebe Kebede',
        'rank': 'Inspector',
        'responsibility': 'Field Officer',
        'phone_number': '+251911000000',
    }
