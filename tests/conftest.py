"""
Shared fixtures for the Newsdesk test suite.

NOTE: pytest and pytest-flask are listed under extras_require["dev"] in
setup.py. Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest

from newsdesk import Config, create_app

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'correct'


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="newsdesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def make_config(tmp_db_dir):
    """Build a Config pointing at a fresh SQLite file; keyword args override fields."""
    def _make_config(**overrides):
        values = {
            'database_url': f"sqlite:///{os.path.join(tmp_db_dir, 'news.db')}",
            'secret_key': 'test-secret',
            'admin_username': ADMIN_USERNAME,
            'admin_password': ADMIN_PASSWORD,
        }
        values.update(overrides)
        return Config(**values)
    return _make_config


@pytest.fixture
def make_app(make_config):
    """Build a fully initialised app; keyword args override Config fields."""
    def _make_app(**overrides):
        return create_app(make_config(**overrides), testing=True)
    return _make_app


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client holding an admin session cookie."""
    response = client.post('/api/login', json={'username': ADMIN_USERNAME, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200, response.get_json()
    return client
