"""
Order status table.

Orders written before statuses existed may have no status at all, so
absent, null and empty values are all read as ``pending``.
"""

from collections import namedtuple
from types import MappingProxyType

StatusOption = namedtuple('StatusOption', ['value', 'label', 'badge'])

DEFAULT_STATUS = 'pending'

ORDER_STATUS_OPTIONS = (
    StatusOption('pending', 'Chưa xử lý', 'secondary'),
    StatusOption('packed', 'Đã đóng gói', 'info'),
    StatusOption('shipping', 'Đang giao', 'primary'),
    StatusOption('completed', 'Hoàn thành', 'success'),
    StatusOption('failed', 'Thất bại', 'danger'),
)

ORDER_STATUS_MAP = MappingProxyType({option.value: option for option in ORDER_STATUS_OPTIONS})


def is_valid_status(value):
    return isinstance(value, str) and value in ORDER_STATUS_MAP


def effective_status(value):
    """Status used for display and filtering"""
    return value if is_valid_status(value) else DEFAULT_STATUS


def get_status_meta(value):
    """Matching status option as a plain dict, pending when unknown"""
    return ORDER_STATUS_MAP[effective_status(value)]._asdict()


def status_options():
    """Status options as plain dicts for templates"""
    return [option._asdict() for option in ORDER_STATUS_OPTIONS]
