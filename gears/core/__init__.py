"""
Core package: library wide configuration.
"""

from .config import Config, SUPPORTED_DIALECTS

__all__ = ['Config', 'SUPPORTED_DIALECTS']
