"""
shopadmin Core
==============

Core utilities and shared functionality for shopadmin modules.
"""

from .config import Config, get_config_value
from .database import Database, Collection, DocumentStoreError
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'Database', 'Collection', 'DocumentStoreError',
           'LoggingService']
