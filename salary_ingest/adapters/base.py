"""Base adapter class with shared HTTP handling for community sources."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..config.models import SourceConfig
from ..domain.models import CommentRecord, RawPost
from ..logging import get_logger
from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")


class BaseAdapter(ABC):
    """Base class for source adapters.

    Subclasses implement fetch_posts() and fetch_comments() on top of the
    shared JSON request helper.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
        max_posts: Posts requested per listing
    """

    def __init__(
        self,
        timeout: int = 30,
        user_agent: str = "salary-ingest/1.0",
        max_posts: int = 50,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize adapter.

        Raises:
            AdapterConfigurationError: If timeout is outside 5-300 seconds,
                user_agent is empty or max_posts is not positive
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")
        if max_posts < 1:
            raise AdapterConfigurationError(f"max_posts must be positive, got: {max_posts}")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self.max_posts = max_posts

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def fetch_posts(self, source_config: SourceConfig) -> List[RawPost]:
        """Fetch the newest posts of a source.

        Returns:
            Posts, newest first. Empty on "not found" and transient errors.

        Raises:
            AdapterError: On fatal errors
        """

    @abstractmethod
    def fetch_comments(self, post_id: str) -> List[CommentRecord]:
        """Fetch the discussion of a post as flat rows, oldest first.

        Raises:
            AdapterError: On fatal errors
        """

    def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET ``url`` and decode the JSON body.

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: On a body that is not JSON
        """
        logger.debug(
            f"HTTP GET request to {url}",
            extra={"event": "adapter.fetch.request", "url": url, "timeout": self.timeout},
        )

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "adapter.fetch.retryable_error", "error_type": "Timeout", "url": url},
            )
            raise AdapterTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "adapter.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise AdapterHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            error = AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )
            logger.log(
                logging.WARNING if error.is_transient else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "adapter.fetch.retryable_error" if error.is_transient else "adapter.fetch.error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise error

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={"event": "adapter.fetch.error", "error_type": "JSONDecodeError", "url": url},
            )
            raise AdapterResponseError(f"Failed to parse JSON response from {url}: {e}") from e

        logger.debug(
            "HTTP request succeeded",
            extra={"event": "adapter.fetch.succeeded", "status_code": response.status_code, "url": url},
        )
        return data

    def close(self) -> None:
        self._session.close()
