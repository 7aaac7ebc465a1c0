"""
Service interfaces for the hybrid text classifier.
"""

from .interfaces import RemoteClassifierInterface

__all__ = [
    "RemoteClassifierInterface"
]
