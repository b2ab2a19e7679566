"""Utility functions for the IPFS-ENS deployment API."""

from ipfs_ens_api.utils.logging import (
    bind_request_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "bind_request_context",
    "configure_logging",
    "get_logger",
]
