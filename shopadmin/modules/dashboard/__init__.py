"""
Dashboard Module
================

Admin landing page for shopadmin.

The dashboard is where permission failures in other modules send the
admin, so it only needs a signed-in role, not any specific permission.
It also owns the shared admin layout (``dashboard/base.html``).
"""

from flask import Blueprint

# Note: Blueprint name is 'admin' to avoid conflicts with site-specific user dashboards
dashboard_bp = Blueprint(
    'admin',
    __name__,
    template_folder='templates',
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
