"""
Asset Status Monitor
====================

Watches Binance deposit/withdraw availability for one coin and posts a
Telegram message whenever a network's status changes.
"""

__version__ = "1.0.0"
