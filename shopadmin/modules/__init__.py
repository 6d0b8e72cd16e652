"""
shopadmin Modules
=================

Flask blueprint modules for the shop admin.
"""

__all__ = ['dashboard', 'orders', 'roles']
