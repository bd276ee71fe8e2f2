"""
API Package
===========

External API clients.

Components:
- binance.py: BinanceClient, request signing
"""

from .binance import BinanceClient, sign_query

__all__ = [
    "BinanceClient",
    "sign_query",
]
