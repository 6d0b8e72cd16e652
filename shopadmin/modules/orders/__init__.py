"""
Orders Admin Module
===================

Admin interface for order management.
Plugs into the admin dashboard module.

Provides:
- Order listing with customer-name search and status filter
- Order detail view with per-line discount pricing
- Order status management
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders',
    __name__,
    template_folder='templates'
)

from . import routes

__all__ = ['orders_bp']
