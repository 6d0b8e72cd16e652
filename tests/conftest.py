"""
Shared fixtures for the shopadmin tests.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import shutil
import tempfile

import pytest
from flask import Flask, template_rendered

from shopadmin import ShopAdmin
from shopadmin.core import Collection


ADMIN_ROLE = {
    '_id': 'role-admin',
    'title': 'Quản trị viên',
    'permissions': ['orders_view', 'products_view'],
    'deleted': False,
}

GUEST_ROLE = {
    '_id': 'role-guest',
    'title': 'Nhân viên kho',
    'permissions': ['products_view'],
    'deleted': False,
}


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="shopadmin-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with shopadmin registered on a throwaway database."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    ShopAdmin(app, {'brand_name': 'Test Shop'})
    seed(app, 'roles', [ADMIN_ROLE, GUEST_ROLE])
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def captured_templates(app):
    """Records (template, context) for every render during the test."""
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


def seed(app, name, documents):
    Collection(name, app.config["SHOP_DB"]).insert_many(documents)


def collection(app, name):
    return Collection(name, app.config["SHOP_DB"])


def login_as(client, role_id):
    with client.session_transaction() as sess:
        sess['role_id'] = role_id


def get_flashes(client):
    with client.session_transaction() as sess:
        return list(sess.get('_flashes', []))
