"""Graph store platform clients."""

from .dgraph_client import (
    DgraphConfig,
    DgraphClient,
    DgraphAPIError,
    TransientAPIError,
    SchemaApplyError,
)

__all__ = [
    "DgraphConfig",
    "DgraphClient",
    "DgraphAPIError",
    "TransientAPIError",
    "SchemaApplyError",
]
