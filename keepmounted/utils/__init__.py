"""Utilities package"""

from keepmounted.utils.logger import get_logger, setup_logging
from keepmounted.utils.validators import (
    require_option, require_file_name, ensure_root, ensure_target_directory, parse_seconds
)

__all__ = [
    'get_logger',
    'setup_logging',
    'require_option',
    'require_file_name',
    'ensure_root',
    'ensure_target_directory',
    'parse_seconds',
]
