"""
Middlewares do core.

Localização: core/middleware/

Middlewares para funcionalidades diversas.
"""
from .exception_logging_middleware import ExceptionLoggingMiddleware

__all__ = ['ExceptionLoggingMiddleware']
