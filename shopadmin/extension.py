"""
Flask extension that wires the shopadmin modules into an app.

    app = Flask(__name__)
    ShopAdmin(app, {'brand_name': 'My Shop'})
"""

import os

from flask import Flask

from .core import Config, LoggingService
from .modules.dashboard import dashboard_bp
from .modules.orders import orders_bp
from .modules.roles import roles_bp

# Settings copied from Config into app.config unless the app sets them
CONFIG_DEFAULTS = (
    'SECRET_KEY',
    'PREFIX_ADMIN',
    'BRAND_NAME',
    'DB_DIR',
    'SHOP_DB',
    'LOGS_DB',
    'LOG_RETENTION_DAYS',
    'ORDERS_VIEW_PERMISSION',
    'ORDERS_STATUS_PERMISSION',
)

DEFAULT_FEATURES = {
    'dashboard': True,
    'orders': True,
}


class ShopAdmin:
    """Registers the admin modules and shared template context"""

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        for key in CONFIG_DEFAULTS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        db_dir = app.config['DB_DIR']
        # Paths derived from a DB_DIR the app overrides follow it
        if app.config['SHOP_DB'] == Config.SHOP_DB and db_dir != Config.DB_DIR:
            app.config['SHOP_DB'] = os.path.join(db_dir, 'shop.db')
        if app.config['LOGS_DB'] == Config.LOGS_DB and db_dir != Config.DB_DIR:
            app.config['LOGS_DB'] = os.path.join(db_dir, 'logs.db')

        self._setup_database_dir(db_dir)
        self._register_commands(app)

        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        prefix = app.config['PREFIX_ADMIN'].rstrip('/')

        # Role resolution is required by every other module
        app.register_blueprint(roles_bp)
        self._registered.append('roles')

        if features.get('dashboard'):
            app.register_blueprint(dashboard_bp, url_prefix=prefix)
            self._registered.append('dashboard')
        if features.get('orders'):
            app.register_blueprint(orders_bp, url_prefix=f"{prefix}/orders")
            self._registered.append('orders')

        brand_name = self._config.get('brand_name') or app.config['BRAND_NAME']

        @app.context_processor
        def inject_shopadmin_context():
            return {
                'shopadmin_config': self._config,
                'brand_name': brand_name,
                'admin_prefix': prefix,
            }

        app.extensions['shopadmin'] = self

    @staticmethod
    def _register_commands(app):
        @app.cli.command('cleanup-logs')
        def cleanup_logs():
            """Delete admin log rows older than LOG_RETENTION_DAYS"""
            deleted = LoggingService.cleanup_old_logs(int(app.config['LOG_RETENTION_DAYS']))
            print(f"Deleted {deleted} old log entries")

    @staticmethod
    def _setup_database_dir(db_dir):
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def get_registered_modules(self):
        return list(self._registered)


def create_app(config=None, settings=None):
    """
    Build a Flask app with shopadmin registered.

    ``settings`` are applied to ``app.config`` before the extension reads it.
    """
    app = Flask(__name__)
    app.config.update(settings or {})
    ShopAdmin(app, config)
    return app
