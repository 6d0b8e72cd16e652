"""
Admin Dashboard Routes
======================
"""

from flask import render_template, g
from . import dashboard_bp
from ..roles import current_permissions


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
def dashboard():
    """Admin dashboard"""
    return render_template(
        'dashboard/dashboard.html',
        pageTitle='Tổng quan',
        role=g.get('role'),
        permissions=current_permissions(),
    )
