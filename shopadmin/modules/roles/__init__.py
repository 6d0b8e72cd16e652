"""
Roles Module
============

Resolves the signed-in admin's role before every request and exposes
permission helpers to the other admin modules.

The session only carries ``role_id``; signing in is handled by the host
application.
"""

from flask import Blueprint

roles_bp = Blueprint('roles', __name__)

from . import middleware
from .middleware import has_permission, permission_required, current_permissions, dashboard_url

__all__ = ['roles_bp', 'has_permission', 'permission_required', 'current_permissions', 'dashboard_url']
