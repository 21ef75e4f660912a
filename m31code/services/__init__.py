"""
Service Layer

Service classes for common operations.
"""

from m31code.services.config_service import ConfigService

__all__ = [
    "ConfigService",
]
