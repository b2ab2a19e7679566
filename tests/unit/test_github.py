"""Unit tests for the GitHub OAuth client."""

import json

import httpx
import pytest

from ipfs_ens_api.core.exceptions import AuthenticationError, GitHubAPIError
from ipfs_ens_api.services.github import GitHubClient


def _client(handler) -> GitHubClient:
    return GitHubClient(
        client_id="client-id",
        client_secret="client-secret",
        transport=httpx.MockTransport(handler),
    )


class TestExchangeCode:
    @pytest.mark.asyncio
    async def test_returns_token_and_scopes(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"access_token": "gho_123", "scope": "repo,read:user", "token_type": "bearer"},
            )

        auth = await _client(handler).exchange_code("abc")

        assert seen["body"] == {
            "client_id": "client-id",
            "client_secret": "client-secret",
            "code": "abc",
        }
        assert auth.token == "gho_123"
        assert auth.scopes == ["repo", "read:user"]
        assert auth.model_dump(by_alias=True)["tokenType"] == "oauth"

    @pytest.mark.asyncio
    async def test_rejected_code(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "error": "bad_verification_code",
                    "error_description": "The code passed is incorrect or expired.",
                },
            )

        with pytest.raises(AuthenticationError) as exc_info:
            await _client(handler).exchange_code("stale")
        assert exc_info.value.details == {"error": "bad_verification_code"}

    @pytest.mark.asyncio
    async def test_server_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(GitHubAPIError) as exc_info:
            await _client(handler).exchange_code("abc")
        assert exc_info.value.details == {"status": 503}

    @pytest.mark.asyncio
    async def test_unconfigured_app(self):
        client = GitHubClient(client_id="", client_secret="")
        with pytest.raises(GitHubAPIError):
            await client.exchange_code("abc")


class TestGetUsername:
    @pytest.mark.asyncio
    async def test_resolves_login(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/user"
            assert request.headers["Authorization"] == "token gho_123"
            return httpx.Response(200, json={"login": "alice", "id": 1})

        assert await _client(handler).get_username("gho_123") == "alice"

    @pytest.mark.asyncio
    async def test_bad_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Bad credentials"})

        with pytest.raises(AuthenticationError):
            await _client(handler).get_username("nope")


class TestUnexpectedResponses:
    """Malformed GitHub answers surface as GitHubAPIError, not crashes."""

    @pytest.mark.asyncio
    async def test_token_exchange_non_json_body(self):
        """Test an HTML body from the token endpoint."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with pytest.raises(GitHubAPIError) as exc_info:
            await _client(handler).exchange_code("abc")
        assert exc_info.value.details == {"status": 200}

    @pytest.mark.asyncio
    async def test_token_exchange_without_access_token(self):
        """Test a JSON body lacking access_token."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"token_type": "bearer"})

        with pytest.raises(GitHubAPIError):
            await _client(handler).exchange_code("abc")

    @pytest.mark.asyncio
    async def test_user_lookup_non_json_body(self):
        """Test an HTML body from the user endpoint."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html></html>")

        with pytest.raises(GitHubAPIError):
            await _client(handler).get_username("gho_123")

    @pytest.mark.asyncio
    async def test_user_lookup_without_login(self):
        """Test a user body lacking login."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"id": 1})

        with pytest.raises(GitHubAPIError):
            await _client(handler).get_username("gho_123")
