"""
Critical Integration Tests for shopadmin
========================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v
"""

import os
import shutil
import tempfile

from flask import Flask

from shopadmin import ShopAdmin, create_app
from shopadmin.core import get_config_value


# ---------------------------------------------------------------------------
# 1. Extension initialisation -- ShopAdmin(app) does not raise
# ---------------------------------------------------------------------------

def test_extension_initialisation(tmp_db_dir):
    """ShopAdmin(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    shopadmin = ShopAdmin(app)

    assert "shopadmin" in app.extensions
    assert app.extensions["shopadmin"] is shopadmin


# ---------------------------------------------------------------------------
# 2. Config resolution -- DB paths follow DB_DIR
# ---------------------------------------------------------------------------

def test_config_db_paths(app, tmp_db_dir):
    """SHOP_DB and LOGS_DB resolve inside the configured DB_DIR."""
    assert app.config["SHOP_DB"] == os.path.join(tmp_db_dir, "shop.db")
    assert app.config["LOGS_DB"] == os.path.join(tmp_db_dir, "logs.db")
    assert app.config["PREFIX_ADMIN"] == "/admin"
    assert app.config["ORDERS_VIEW_PERMISSION"] == "orders_view"


def test_explicit_db_path_is_kept(tmp_db_dir):
    """An app-provided SHOP_DB is not overwritten."""
    shop_db = os.path.join(tmp_db_dir, "custom", "orders.db")
    app = create_app(settings={
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DB_DIR": tmp_db_dir,
        "SHOP_DB": shop_db,
    })

    assert app.config["SHOP_DB"] == shop_db


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- expected modules are registered
# ---------------------------------------------------------------------------

def test_all_modules_registered(app):
    registered = app.extensions["shopadmin"].get_registered_modules()

    assert registered == ["roles", "dashboard", "orders"]


def test_orders_feature_can_be_disabled(tmp_db_dir):
    app = create_app(
        config={'features': {'orders': False}},
        settings={"TESTING": True, "SECRET_KEY": "test-secret", "DB_DIR": tmp_db_dir},
    )

    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/admin/orders" not in rules
    assert "/admin/dashboard" in rules


def test_order_routes_registered(app):
    """List, detail and status routes live under the admin prefix."""
    rules = {rule.rule: rule.methods for rule in app.url_map.iter_rules()}

    assert "GET" in rules["/admin/orders"]
    assert "GET" in rules["/admin/orders/<order_id>"]
    assert "POST" in rules["/admin/orders/<order_id>/status"]


def test_custom_admin_prefix(tmp_db_dir):
    app = create_app(settings={
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DB_DIR": tmp_db_dir,
        "PREFIX_ADMIN": "/quan-tri",
    })

    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/quan-tri/orders" in rules
    assert "/quan-tri/dashboard" in rules


def test_root_admin_prefix(tmp_db_dir):
    """An empty PREFIX_ADMIN mounts the admin at the site root."""
    app = create_app(settings={
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DB_DIR": tmp_db_dir,
        "PREFIX_ADMIN": "",
    })

    with app.app_context():
        assert get_config_value("PREFIX_ADMIN") == ""

    client = app.test_client()
    response = client.get("/orders")

    assert response.status_code == 302
    assert response.headers["Location"] == "/dashboard"
    assert client.get(response.headers["Location"]).status_code == 200


def test_denied_redirect_without_dashboard_module(tmp_db_dir):
    app = create_app(
        config={"features": {"dashboard": False}},
        settings={"TESTING": True, "SECRET_KEY": "test-secret", "DB_DIR": tmp_db_dir},
    )

    response = app.test_client().get("/admin/orders")

    assert response.status_code == 302
    assert response.headers["Location"] == "/admin/dashboard"


def test_config_value_keeps_falsy_settings(app):
    app.config["BRAND_NAME"] = ""
    app.config["SHOP_PAGE_SIZE"] = 0

    with app.app_context():
        assert get_config_value("BRAND_NAME") == ""
        assert get_config_value("SHOP_PAGE_SIZE", 20) == 0
        assert get_config_value("SHOP_MISSING_KEY", "fallback") == "fallback"


# ---------------------------------------------------------------------------
# 4. Template context -- shopadmin_config and brand_name are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert ctx["brand_name"] == "Test Shop"
        assert ctx["admin_prefix"] == "/admin"
        assert isinstance(ctx["shopadmin_config"], dict)


# ---------------------------------------------------------------------------
# 5. Database directory creation
# ---------------------------------------------------------------------------

def test_database_dir_creation():
    """init_app creates the configured DB_DIR on disk."""
    d = tempfile.mkdtemp(prefix="shopadmin-dbtest-")
    target = os.path.join(d, "sub", "databases")

    try:
        app = Flask(__name__)
        app.config["TESTING"] = True
        app.config["SECRET_KEY"] = "test-secret"
        app.config["DB_DIR"] = target

        ShopAdmin(app)

        assert os.path.isdir(target), f"DB_DIR was not created at {target}"
    finally:
        shutil.rmtree(d, ignore_errors=True)


# ---------------------------------------------------------------------------
# 6. Dashboard -- renders with and without a role
# ---------------------------------------------------------------------------

def test_dashboard_renders_without_role(client):
    response = client.get("/admin/dashboard")

    assert response.status_code == 200
    assert "Tài khoản chưa được gán vai trò" in response.get_data(as_text=True)


def test_dashboard_shows_role(client):
    with client.session_transaction() as sess:
        sess['role_id'] = 'role-admin'

    response = client.get("/admin/dashboard")

    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert "Quản trị viên" in body
    assert "/admin/orders" in body
