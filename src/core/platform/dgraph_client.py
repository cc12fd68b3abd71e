"""
Dgraph HTTP API Client

This module provides functionality to apply a schema to a Dgraph alpha
through its HTTP API:

- ``GET /health``: check that the alpha is reachable before touching data
- ``POST /alter`` with ``{"drop_all": true}``: wipe all data and schema
- ``POST /alter`` with schema text: apply predicates and node types

Applying a schema is destructive. ``apply_schema`` therefore runs the health
check first and sends the whole schema in a single alteration once the wipe
has succeeded.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from constants import DgraphAPIConfig

logger = logging.getLogger(__name__)


class DgraphAPIError(Exception):
    """Exception for Dgraph API errors."""

    def __init__(self, status_code: int, error_code: str, message: str):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        super().__init__(f"Dgraph API Error ({status_code}): {error_code} - {message}")


class TransientAPIError(DgraphAPIError):
    """Exception for transient errors (connection failures, 502/503/504) that should be retried."""


class SchemaApplyError(DgraphAPIError):
    """
    Raised when applying a schema fails.

    Attributes:
        phase: ``health``, ``drop_all`` or ``alter``.
        store_modified: Whether the store was already wiped when the
            failure occurred.
    """

    def __init__(self, phase: str, cause: DgraphAPIError, store_modified: bool = False):
        self.phase = phase
        self.store_modified = store_modified
        self.cause = cause
        detail = cause.message
        if store_modified:
            detail += " (store was already wiped; re-run to apply the schema)"
        super().__init__(cause.status_code, f"SchemaApplyFailed:{phase}", detail)


def _is_transient_error(exception: BaseException) -> bool:
    """Check if exception is a transient error that should be retried."""
    if isinstance(exception, TransientAPIError):
        return True
    if isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    return False


@dataclass
class DgraphConfig:
    """Configuration for Dgraph API access."""
    url: str = DgraphAPIConfig.DEFAULT_URL
    timeout: int = DgraphAPIConfig.DEFAULT_TIMEOUT_SECONDS
    max_retries: int = DgraphAPIConfig.DEFAULT_MAX_RETRIES
    retry_backoff: float = DgraphAPIConfig.DEFAULT_RETRY_BACKOFF

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any], url_override: Optional[str] = None) -> 'DgraphConfig':
        """
        Create DgraphConfig from a dictionary.

        The URL is taken from ``url_override``, then the environment variable
        ``CIMGRAPH_DGRAPH_URL``, then the ``dgraph.url`` setting, then the
        default.
        """
        dgraph_config = config_dict.get('dgraph', {}) if config_dict else {}
        if not isinstance(dgraph_config, dict):
            raise ValueError(f"'dgraph' configuration must be an object, got {type(dgraph_config).__name__}")

        url = (
            url_override
            or os.environ.get(DgraphAPIConfig.URL_ENV_VAR)
            or dgraph_config.get('url')
            or DgraphAPIConfig.DEFAULT_URL
        )
        try:
            config = cls(
                url=url,
                timeout=int(dgraph_config.get('timeout', DgraphAPIConfig.DEFAULT_TIMEOUT_SECONDS)),
                max_retries=int(dgraph_config.get('max_retries', DgraphAPIConfig.DEFAULT_MAX_RETRIES)),
                retry_backoff=float(dgraph_config.get('retry_backoff', DgraphAPIConfig.DEFAULT_RETRY_BACKOFF)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid 'dgraph' configuration: {e}")

        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError for settings the client cannot work with."""
        parsed = urlparse(self.url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"Invalid Dgraph URL '{self.url}': expected http(s)://host[:port]")
        if self.timeout <= 0:
            raise ValueError(f"dgraph.timeout must be positive, got {self.timeout}")
        if self.max_retries < 1:
            raise ValueError(f"dgraph.max_retries must be at least 1, got {self.max_retries}")
        if self.retry_backoff < 0:
            raise ValueError(f"dgraph.retry_backoff must not be negative, got {self.retry_backoff}")


class DgraphClient:
    """
    Client for the Dgraph alpha HTTP API.

    Example:
        >>> client = DgraphClient(DgraphConfig(url="http://localhost:8080"))
        >>> client.apply_schema("rdf.about: string .\\n")
    """

    def __init__(self, config: DgraphConfig):
        """
        Initialize the Dgraph client.

        Args:
            config: DgraphConfig instance with connection details
        """
        if not config:
            raise ValueError("config cannot be None")

        if not isinstance(config, DgraphConfig):
            raise TypeError(f"config must be DgraphConfig instance, got {type(config)}")

        config.validate()
        self.config = config
        self.base_url = config.url.rstrip('/')

    def _make_request(
        self,
        method: str,
        url: str,
        operation_name: str,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request with consistent error handling.

        Transport failures are raised as TransientAPIError so that the retry
        policy can pick them up.

        Raises:
            TransientAPIError: On timeouts and connection failures
            DgraphAPIError: On any other request failure
        """
        timeout = self.config.timeout
        try:
            logger.debug(f"{operation_name}: {method} {url}")
            return requests.request(method, url, timeout=timeout, **kwargs)

        except requests.exceptions.Timeout:
            logger.error(f"{operation_name}: Request timeout after {timeout}s")
            raise TransientAPIError(
                status_code=408,
                error_code='RequestTimeout',
                message=f'{operation_name} timed out after {timeout} seconds'
            )

        except requests.exceptions.ConnectionError as e:
            logger.error(f"{operation_name}: Connection error: {e}")
            raise TransientAPIError(
                status_code=503,
                error_code='ConnectionError',
                message=f'{operation_name} failed to connect to Dgraph at {self.base_url}: {e}'
            )

        except requests.exceptions.RequestException as e:
            logger.error(f"{operation_name}: Request error: {e}")
            raise DgraphAPIError(
                status_code=500,
                error_code='RequestError',
                message=f'{operation_name} request failed: {e}'
            )

    def _handle_response(self, response: requests.Response) -> Union[Dict[str, Any], List[Any]]:
        """Handle API response and raise appropriate errors."""
        if response.status_code in DgraphAPIConfig.TRANSIENT_STATUS_CODES:
            logger.warning(f"Dgraph unavailable ({response.status_code})")
            raise TransientAPIError(
                status_code=response.status_code,
                error_code='ServiceUnavailable',
                message=response.text[:500] or 'Service temporarily unavailable'
            )

        payload: Union[Dict[str, Any], List[Any]] = {}
        if response.text:
            try:
                payload = response.json()
            except json.JSONDecodeError as e:
                if response.status_code == 200:
                    logger.error(f"Failed to parse JSON response: {e}")
                    logger.debug(f"Response text: {response.text[:500]}")
                    raise DgraphAPIError(
                        status_code=response.status_code,
                        error_code='InvalidResponse',
                        message=f'Server returned invalid JSON: {e}'
                    )
                payload = {}

        # Dgraph reports failed alterations in an "errors" list, sometimes with HTTP 200
        errors = payload.get('errors') if isinstance(payload, dict) else None
        if errors:
            first = errors[0] if isinstance(errors[0], dict) else {'message': str(errors[0])}
            raise DgraphAPIError(
                status_code=response.status_code,
                error_code=first.get('extensions', {}).get('code', 'Error'),
                message=first.get('message', response.text),
            )

        if response.status_code == 200:
            return payload

        raise DgraphAPIError(
            status_code=response.status_code,
            error_code='HTTPError',
            message=response.text[:500] or response.reason or 'Request failed',
        )

    def _call(self, method: str, path: str, operation_name: str, **kwargs) -> Union[Dict[str, Any], List[Any]]:
        """Send a request, retrying transient failures with exponential backoff."""
        retrying = Retrying(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(
                multiplier=self.config.retry_backoff,
                max=DgraphAPIConfig.MAX_RETRY_WAIT_SECONDS,
            ),
            retry=retry_if_exception(_is_transient_error),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        url = f"{self.base_url}{path}"
        return retrying(
            lambda: self._handle_response(self._make_request(method, url, operation_name, **kwargs))
        )

    def check_health(self) -> List[Dict[str, Any]]:
        """
        Check that the Dgraph alpha is reachable and healthy.

        Returns:
            The health entries reported by the alpha.

        Raises:
            DgraphAPIError: If the alpha cannot be reached or reports no
                healthy instance.
        """
        payload = self._call('GET', '/health', 'Health check')
        entries = payload if isinstance(payload, list) else [payload]
        statuses = [e.get('status') for e in entries if isinstance(e, dict)]
        if 'healthy' not in statuses:
            raise DgraphAPIError(
                status_code=503,
                error_code='Unhealthy',
                message=f"Dgraph at {self.base_url} reports status {statuses or 'unknown'}"
            )
        logger.info(f"Dgraph at {self.base_url} is healthy")
        return entries

    def drop_all(self) -> Dict[str, Any]:
        """Remove all data and schema from the store."""
        logger.warning(f"Dropping all data and schema at {self.base_url}")
        result = self._call('POST', '/alter', 'Drop all', json={'drop_all': True})
        return result if isinstance(result, dict) else {}

    def alter_schema(self, schema_text: str) -> Dict[str, Any]:
        """Apply schema statements in one alteration."""
        result = self._call(
            'POST',
            '/alter',
            'Alter schema',
            data=schema_text.encode('utf-8'),
        )
        return result if isinstance(result, dict) else {}

    def apply_schema(self, schema_text: str, drop_existing: bool = True) -> Dict[str, Any]:
        """
        Replace the store's schema.

        Runs the health check, then the wipe, then a single alteration with the
        whole schema text.

        Raises:
            SchemaApplyError: Naming the phase that failed. ``store_modified``
                is set when the failure happened after the wipe.
        """
        try:
            self.check_health()
        except DgraphAPIError as e:
            raise SchemaApplyError('health', e)

        wiped = False
        if drop_existing:
            try:
                self.drop_all()
            except DgraphAPIError as e:
                raise SchemaApplyError('drop_all', e)
            wiped = True

        try:
            result = self.alter_schema(schema_text)
        except DgraphAPIError as e:
            raise SchemaApplyError('alter', e, store_modified=wiped)

        logger.info("Schema applied successfully")
        return result
