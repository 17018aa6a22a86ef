"""
Configuration management for safe routing.
"""

from .routing_config import RoutingConfig

__all__ = [
    'RoutingConfig'
]
