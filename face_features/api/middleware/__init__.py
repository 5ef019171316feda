"""
face_features/api/middleware
API 中介軟體模組
"""

from .error_handler import (
    error_handler_middleware,
    setup_exception_handlers
)
from .logging import (
    logging_middleware,
    setup_logging
)

__all__ = [
    "error_handler_middleware",
    "setup_exception_handlers",
    "logging_middleware",
    "setup_logging",
]