"""Utility modules for the Elasticsearch client."""

from .sanitizer import (
    mask_sensitive_data,
    mask_string,
    mask_headers,
    sanitize_url,
)

__all__ = [
    'mask_sensitive_data',
    'mask_string',
    'mask_headers',
    'sanitize_url',
]
