"""
Role Middleware
===============

Loads ``g.role`` as ``{'title': ..., 'permissions': [...]}`` from the roles
collection, or ``None`` when the session has no usable role.
"""

from functools import wraps

from flask import g, session, flash, redirect, request, url_for, current_app
from werkzeug.routing import BuildError

from . import roles_bp
from ...core import Config, Database, LoggingService, get_config_value


@roles_bp.before_app_request
def load_role():
    """Attach the current admin role to the request context"""
    g.role = None

    role_id = session.get('role_id')
    if not role_id:
        return

    try:
        role = Database.collection(Config.ROLES_COLLECTION).find_one(
            {'_id': str(role_id), 'deleted': False},
            projection=['title', 'permissions']
        )
    except Exception as e:
        LoggingService.log_error_with_traceback('roles', e, {'role_id': role_id})
        return

    if role:
        g.role = {
            'title': role.get('title', ''),
            'permissions': list(role.get('permissions') or []),
        }


def current_permissions():
    role = g.get('role')
    if not role or not isinstance(role.get('permissions'), list):
        return []
    return role['permissions']


def has_permission(permission):
    return permission in current_permissions()


def dashboard_url():
    """URL of the admin dashboard, built from the registered route when there is one"""
    try:
        return url_for('admin.dashboard')
    except BuildError:
        return f"{current_app.config.get('PREFIX_ADMIN') or ''}/dashboard"


def permission_required(permission_key, message):
    """
    Decorator to require a permission named by a config key.

    Denied requests get an error flash and are sent to the admin dashboard
    before the view runs.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            permission = get_config_value(permission_key)
            if not has_permission(permission):
                LoggingService.log_security_event(
                    f"Permission '{permission}' denied",
                    {'path': request.path, 'method': request.method}
                )
                flash(message, 'error')
                return redirect(dashboard_url())
            return f(*args, **kwargs)
        return decorated_function
    return decorator
