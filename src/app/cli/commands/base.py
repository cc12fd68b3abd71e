"""
Base command class and protocols.

This module contains the base command class that all CLI commands inherit from,
as well as protocol definitions for dependency injection.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..helpers import (
    get_config_section,
    get_default_config_path,
    load_config,
    print_footer,
    print_header,
    setup_logging,
)
from shared.models import SchemaConversionResult


logger = logging.getLogger(__name__)


# ============================================================================
# Helper Utilities
# ============================================================================

def print_conversion_summary(result: SchemaConversionResult, heading: Optional[str] = None) -> None:
    """Print a consistent summary for a conversion result."""
    if heading:
        print_header(heading)
    print(result.get_summary())
    if heading:
        print_footer()


# ============================================================================
# Protocols for Dependency Injection
# ============================================================================

class IDgraphClient(Protocol):
    """Protocol for Dgraph API operations."""

    def apply_schema(self, schema_text: str, drop_existing: bool = True) -> dict:
        """Replace the store's schema."""
        ...


# ============================================================================
# Base Command Class
# ============================================================================

class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        client: Optional[IDgraphClient] = None,
        url: Optional[str] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file.
            client: Optional Dgraph client instance (for dependency injection).
            url: Dgraph URL overriding environment and configuration.
        """
        self.config_path = config_path or get_default_config_path()
        self.url = url
        self._client = client
        self._config: Optional[Dict[str, Any]] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; a missing file yields defaults."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    def config_section(self, name: str) -> Dict[str, Any]:
        return get_config_section(self.config, name)

    def get_client(self) -> IDgraphClient:
        """Get or create Dgraph client instance."""
        if self._client is None:
            from core.platform.dgraph_client import DgraphClient, DgraphConfig
            dgraph_config = DgraphConfig.from_dict(self.config, url_override=self.url)
            logger.info(f"Using Dgraph at {dgraph_config.url}")
            self._client = DgraphClient(dgraph_config)
        return self._client

    def setup_logging_from_config(self, allow_missing: bool = True) -> None:
        """Setup logging configuration, falling back gracefully if config is absent."""
        log_config: Dict[str, Any] = {}

        if self._config is not None:
            log_config = self._config.get('logging', {}) or {}
        elif Path(self.config_path).exists() or not allow_missing:
            try:
                self._config = load_config(self.config_path, required=not allow_missing)
                log_config = self._config.get('logging', {}) or {}
            except (ValueError, OSError) as exc:
                if not allow_missing:
                    raise
                print(f"Warning: Could not load logging configuration: {exc}")

        setup_logging(config=log_config if isinstance(log_config, dict) else {})

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
