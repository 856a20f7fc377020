"""Factory function for instantiating source adapters."""

from typing import Dict, Type

from ..config.models import AdvancedConfig, SourceConfig
from ..logging import get_logger
from .base import BaseAdapter
from .exceptions import AdapterConfigurationError
from .reddit import RedditAdapter

logger = get_logger(__name__, component="adapter")

ADAPTERS: Dict[str, Type[BaseAdapter]] = {
    "reddit": RedditAdapter,
}


def get_adapter(source_config: SourceConfig, advanced_config: AdvancedConfig) -> BaseAdapter:
    """Instantiate the adapter for a source's platform.

    Raises:
        AdapterConfigurationError: If the platform is unknown or the settings
            are rejected by the adapter

    Example:
        >>> from salary_ingest.config.sources import BESALARY
        >>> adapter = get_adapter(BESALARY, AdvancedConfig())
        >>> type(adapter).__name__
        'RedditAdapter'
    """
    platform = source_config.platform
    adapter_class = ADAPTERS.get(platform)
    if adapter_class is None:
        raise AdapterConfigurationError(
            f"Unknown platform: {platform}. Supported platforms: {', '.join(sorted(ADAPTERS))}"
        )

    logger.debug(
        "Creating adapter instance",
        extra={
            "event": "adapter.created",
            "platform": platform,
            "source_id": source_config.name,
            "adapter_class": adapter_class.__name__,
        },
    )

    try:
        return adapter_class(
            timeout=advanced_config.http_request_timeout,
            user_agent=advanced_config.user_agent,
            max_posts=advanced_config.max_posts_per_source,
        )
    except AdapterConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        raise AdapterConfigurationError(f"Failed to create {platform} adapter: {e}") from e
