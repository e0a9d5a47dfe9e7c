"""
Interfaces package for the Pokedex Proxy.

This package contains the abstract base interfaces used by the service to
standardize interactions with the upstream API.
"""

from .connector import APIConnector
from .normalizer import DataNormalizer
from .cache import CacheStrategy

__all__ = [
    'APIConnector',
    'DataNormalizer',
    'CacheStrategy',
]
