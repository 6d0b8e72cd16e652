"""
Centralized logging service for the shop admin.
Provides structured logging with database storage and easy integration.
"""

import json
import logging
import os
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context
from .database import Database
from .config import Config, get_config_value

fallback_logger = logging.getLogger('shopadmin')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _logs_db():
        path = get_config_value('LOGS_DB', Config.LOGS_DB)
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return path

    @staticmethod
    def _ensure_logs_table(conn):
        """Ensure the app_logs table exists"""
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                user_agent TEXT,
                request_path TEXT,
                user_id TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp
            ON app_logs(timestamp DESC)
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_source
            ON app_logs(source)
        """)
        return cursor

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (orders, roles, dashboard, etc.)
            message (str): Main log message
            details (str/dict): Additional details (will be JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            ip_address, user_agent, request_path = LoggingService._get_request_context()
            timestamp = datetime.now().isoformat()

            with Database.connect(LoggingService._logs_db()) as conn:
                cursor = LoggingService._ensure_logs_table(conn)
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    timestamp, level.upper(), source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()

        except Exception as e:
            # Fallback to the process logger if the log database fails
            level_no = getattr(logging, level.upper(), logging.INFO)
            fallback_logger.log(level_no, f"[{source}] {message}")
            if details:
                fallback_logger.log(level_no, f"Details: {details}")
            fallback_logger.warning(f"Logging service error: {e}")

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (status changes, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events such as permission denials"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def recent_logs(source=None, limit=50):
        """Most recent log rows, newest first"""
        query = "SELECT timestamp, level, source, message, details FROM app_logs"
        params = []
        if source:
            query += " WHERE source = ?"
            params.append(source)
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with Database.connect(LoggingService._logs_db()) as conn:
            cursor = LoggingService._ensure_logs_table(conn)
            cursor.execute(query, params)
            columns = ['timestamp', 'level', 'source', 'message', 'details']
            return [dict(zip(columns, row)) for row in cursor.fetchall()]

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        try:
            cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

            with Database.connect(LoggingService._logs_db()) as conn:
                cursor = LoggingService._ensure_logs_table(conn)
                cursor.execute("""
                    DELETE FROM app_logs
                    WHERE timestamp < ?
                """, (cutoff_iso,))

                deleted_count = cursor.rowcount
                conn.commit()

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0

