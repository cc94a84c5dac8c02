"""
Configuration module for planerelay.
"""

from .relay_config import RelayConfig, DEFAULT_WINDOW_MS

__all__ = [
    "RelayConfig",
    "DEFAULT_WINDOW_MS",
]
