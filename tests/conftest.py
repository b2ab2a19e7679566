"""Pytest configuration and fixtures."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from ipfs_ens_api.api.deps import get_github
from ipfs_ens_api.core.exceptions import AuthenticationError
from ipfs_ens_api.core.store import DeploymentStore, get_deployment_store
from ipfs_ens_api.main import app
from ipfs_ens_api.models.deployment import DeployArgs
from ipfs_ens_api.models.responses import GitAuth

TOKENS = {
    "alice-token": "alice",
    "bob-token": "bob",
}


class FakeGitHubClient:
    """Stands in for GitHub: fixed tokens, one valid OAuth code."""

    async def exchange_code(self, code: str) -> GitAuth:
        if code != "good-code":
            raise AuthenticationError("bad_verification_code")
        return GitAuth(token="alice-token", scopes=["repo", "read:user"])

    async def get_username(self, token: str) -> str:
        if token not in TOKENS:
            raise AuthenticationError("GitHub rejected the token")
        return TOKENS[token]


@pytest.fixture
def store() -> DeploymentStore:
    """Create a fresh deployment store for tests."""
    return DeploymentStore(codepipeline_prefix="test-")


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client with a fake GitHub and an empty store."""
    get_deployment_store().clear()
    app.dependency_overrides[get_github] = FakeGitHubClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    get_deployment_store().clear()


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return {"Authorization": "token alice-token"}


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return {"Authorization": "Bearer bob-token"}


@pytest.fixture
def deploy_args_payload() -> dict[str, Any]:
    """Wire-form arguments for a new deployment."""
    return {
        "packageDir": ".",
        "buildDir": "build",
        "owner": "alice",
        "repo": "homepage",
        "branch": "main",
        "ensName": "alice-homepage",
        "sourceProvider": "GitHub",
    }


@pytest.fixture
def deploy_args(deploy_args_payload: dict[str, Any]) -> DeployArgs:
    return DeployArgs.model_validate(deploy_args_payload)


@pytest.fixture
def deploy_item_payload(deploy_args_payload: dict[str, Any]) -> dict[str, Any]:
    """A wire-form record half way through its ENS stages."""
    return {
        **deploy_args_payload,
        "createdAt": "1571326800000",
        "updatedAt": "1571327400000",
        "username": "alice",
        "codepipelineName": "ipfs-ens-alice-homepage",
        "state": "SETTING_RESOLVER_ENS",
        "transitions": {
            "source": {"timestamp": "1571326860000", "size": 48213},
            "build": {"timestamp": "1571327040000", "size": 1048576},
            "ipfs": {
                "timestamp": "1571327100000",
                "hash": "QmT78zSuBmuS4z925WZfrqQ1qHaJ56DQaTfyMUF7F8ff5o",
            },
            "ensRegister": {
                "timestamp": "1571327160000",
                "txHash": "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060",
                "nonce": 7,
                "blockNumber": 8765432,
                "confirmationTimestamp": "1571327220000",
            },
        },
    }
