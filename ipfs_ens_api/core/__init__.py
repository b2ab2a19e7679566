"""Core functionality for the IPFS-ENS deployment API."""

from ipfs_ens_api.core.exceptions import (
    AuthenticationError,
    DeploymentExistsError,
    DeploymentNotFoundError,
    GitHubAPIError,
    InvalidPayloadError,
    IpfsEnsError,
    TransitionOrderError,
)

__all__ = [
    "IpfsEnsError",
    "AuthenticationError",
    "DeploymentExistsError",
    "DeploymentNotFoundError",
    "GitHubAPIError",
    "InvalidPayloadError",
    "TransitionOrderError",
]
