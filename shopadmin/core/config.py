import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the shopadmin package.
    Projects should provide database paths via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Admin routes are mounted under this prefix
    PREFIX_ADMIN = os.getenv('PREFIX_ADMIN', '/admin')

    BRAND_NAME = os.getenv('BRAND_NAME', 'Shop Admin')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    SHOP_DB = os.getenv('SHOP_DB', os.path.join(DB_DIR, "shop.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "logs.db"))

    # Rows older than this are removed by `flask cleanup-logs`
    LOG_RETENTION_DAYS = int(os.getenv('LOG_RETENTION_DAYS', 30))

    # Collection names
    ORDERS_COLLECTION = "orders"
    PRODUCTS_COLLECTION = "products"
    ROLES_COLLECTION = "roles"

    # Permissions
    ORDERS_VIEW_PERMISSION = "orders_view"
    # Status changes are gated by the view permission unless a project tightens it
    ORDERS_STATUS_PERMISSION = os.getenv('ORDERS_STATUS_PERMISSION', ORDERS_VIEW_PERMISSION)


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
