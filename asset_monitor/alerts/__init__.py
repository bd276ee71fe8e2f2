"""
Alerts Package
==============

Outbound notifications.

Components:
- telegram.py: TelegramNotifier, NotifierConfig
"""

from .telegram import TelegramNotifier, NotifierConfig

__all__ = [
    "TelegramNotifier",
    "NotifierConfig",
]
