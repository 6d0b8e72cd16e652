"""
shopadmin - Order administration for Flask shops
================================================

Admin pages for an e-commerce backend:
- Order list with customer search and status filter
- Order detail with discounted line-item pricing
- Order status changes gated by role permissions

Usage:
    from shopadmin import ShopAdmin

    app = Flask(__name__)
    ShopAdmin(app)
"""

__version__ = '0.1.0'

from .extension import ShopAdmin, create_app

__all__ = ['ShopAdmin', 'create_app']
