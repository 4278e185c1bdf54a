"""Core application modules."""

from .config import (
    AppConfig,
    PolicyResolution,
    SecurityOverrides,
    get_settings,
    load_policy,
    resolve_policy,
)
from .error_handlers import register_exception_handlers
from .exceptions import ConfigError, NotFoundError, ServiceException
from .logging import setup_logging
from .middleware import LoggingMiddleware
from .security import SecurityHeadersMiddleware, apply_security_headers

__all__ = [
    "AppConfig",
    "ConfigError",
    "LoggingMiddleware",
    "NotFoundError",
    "PolicyResolution",
    "SecurityHeadersMiddleware",
    "SecurityOverrides",
    "ServiceException",
    "apply_security_headers",
    "get_settings",
    "load_policy",
    "register_exception_handlers",
    "resolve_policy",
    "setup_logging",
]
