"""
Shared Data Models
==================

Immutable status records used across the project.
"""

from .status import NetworkStatus, StatusSnapshot

__all__ = [
    "NetworkStatus",
    "StatusSnapshot",
]
