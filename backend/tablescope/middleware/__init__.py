"""TableScope middleware — error handling and request logging."""

from .error_handler import ErrorHandlerMiddleware, profiling_error_handler
from .request_logger import RequestLoggerMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "RequestLoggerMiddleware",
    "profiling_error_handler",
]
