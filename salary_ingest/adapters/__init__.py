"""Source adapters that fetch raw posts and comment threads.

Use the factory to build the adapter for a source:
    from salary_ingest.adapters import get_adapter
    adapter = get_adapter(source_config, app_config.advanced)
    posts = adapter.fetch_posts(source_config)
"""

from .base import BaseAdapter
from .exceptions import (
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)
from .factory import ADAPTERS, get_adapter
from .reddit import RedditAdapter, flatten_listing

__all__ = [
    # Base and factory
    "ADAPTERS",
    "BaseAdapter",
    "get_adapter",
    # Adapters
    "RedditAdapter",
    "flatten_listing",
    # Exceptions
    "AdapterConfigurationError",
    "AdapterError",
    "AdapterHTTPError",
    "AdapterResponseError",
    "AdapterTimeoutError",
]
