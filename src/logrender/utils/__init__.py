"""Utility modules for logrender.

Provides:
- logger: get_logger for logging
- naming: qualified type names used by type-key matching
"""

from logrender.utils.logger import get_logger
from logrender.utils.naming import normalize_type_name, qualified_name, type_names

__all__ = [
    "get_logger",
    "normalize_type_name",
    "qualified_name",
    "type_names",
]
