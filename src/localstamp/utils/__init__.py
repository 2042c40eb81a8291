"""Utility package for general-purpose helpers.

Provides environment configuration helpers.
"""

from .env import get_env_bool, get_env_str

__all__ = [
    "get_env_bool",
    "get_env_str",
]
