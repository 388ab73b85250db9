"""
Service layer for the Pick-n-Pull inventory watch.
"""

from .config_manager import ConfigurationManager

__all__ = [
    "ConfigurationManager",
]
