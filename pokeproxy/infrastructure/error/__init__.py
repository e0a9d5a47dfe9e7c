"""
Error handling package for the Pokedex Proxy.
Provides centralized error categorization and logging.
"""

from pokeproxy.infrastructure.error.handler import (
    ErrorHandler,
    ErrorDetails,
    ErrorCategory,
    ErrorSeverity
)

__all__ = [
    "ErrorHandler",
    "ErrorDetails",
    "ErrorCategory",
    "ErrorSeverity",
]
