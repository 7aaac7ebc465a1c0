"""
Configuration package for the hybrid text classifier backend.
"""

from .system_config import config, SystemConfig, AWSConfig, APIConfig

__all__ = [
    'config',
    'SystemConfig',
    'AWSConfig',
    'APIConfig'
]
