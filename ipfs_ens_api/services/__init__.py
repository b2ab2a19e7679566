"""External service clients."""

from ipfs_ens_api.services.github import GitHubClient, get_github_client

__all__ = [
    "GitHubClient",
    "get_github_client",
]
