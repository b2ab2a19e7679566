"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends, Header

from ipfs_ens_api.core.exceptions import AuthenticationError
from ipfs_ens_api.core.store import DeploymentStore, get_deployment_store
from ipfs_ens_api.services.github import GitHubClient, get_github_client

TOKEN_SCHEMES = ("token", "bearer")


async def get_store() -> DeploymentStore:
    """Get the deployment store."""
    return get_deployment_store()


async def get_github() -> GitHubClient:
    """Get the GitHub client."""
    return get_github_client()


async def get_current_user(
    github: Annotated[GitHubClient, Depends(get_github)],
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the caller's GitHub username from the Authorization header."""
    if not authorization:
        raise AuthenticationError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() not in TOKEN_SCHEMES or not token:
        raise AuthenticationError("Expected 'Authorization: token <github-token>'")

    return await github.get_username(token)


StoreDep = Annotated[DeploymentStore, Depends(get_store)]
GitHubDep = Annotated[GitHubClient, Depends(get_github)]
UserDep = Annotated[str, Depends(get_current_user)]
