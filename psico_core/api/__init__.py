"""
API Client Module
Single pre-configured client for the records API
"""

from .client import ApiClient, ApiConfig, unwrap_data

__all__ = [
    "ApiClient",
    "ApiConfig",
    "unwrap_data",
]
