from .error_handler import ErrorHandlerMiddleware, create_http_exception_handler, create_validation_exception_handler
from .logging_middleware import LoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
    "create_http_exception_handler",
    "create_validation_exception_handler",
]
