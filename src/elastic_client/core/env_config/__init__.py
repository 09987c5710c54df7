"""
Environment configuration.

Example:
    >>> from elastic_client.core.env_config import load_from_env
    >>> params, config = load_from_env()
"""

from .loader import load_from_env
from .settings import ElasticClientSettings

__all__ = [
    'load_from_env',
    'ElasticClientSettings',
]
