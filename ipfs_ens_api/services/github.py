"""GitHub OAuth client.

Exchanges the code from GitHub's authorize redirect for an access token and
resolves tokens back to usernames for the private deployment routes.
"""

from typing import Any

import httpx

from ipfs_ens_api.config import settings
from ipfs_ens_api.core.exceptions import AuthenticationError, GitHubAPIError
from ipfs_ens_api.models.responses import GitAuth
from ipfs_ens_api.utils.logging import get_logger

logger = get_logger(__name__)


class GitHubClient:
    """Thin async wrapper over the GitHub endpoints the API needs."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = settings.github_client_id if client_id is None else client_id
        self.client_secret = (
            settings.github_client_secret if client_secret is None else client_secret
        )
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=settings.github_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )

    async def exchange_code(self, code: str) -> GitAuth:
        """Trade an OAuth code for a token."""
        if not self.client_id or not self.client_secret:
            raise GitHubAPIError("OAuth app credentials are not configured")

        async with self._client() as client:
            try:
                response = await client.post(
                    settings.github_oauth_url,
                    json={
                        "client_id": self.client_id,
                        "client_secret": self.client_secret,
                        "code": code,
                    },
                )
            except httpx.HTTPError as exc:
                raise GitHubAPIError(str(exc)) from exc

        if response.status_code != 200:
            raise GitHubAPIError("token exchange rejected", response.status_code)

        payload = _json_body(response)
        # GitHub reports bad or expired codes with a 200 and an error body
        if "error" in payload:
            logger.warning("github.code_rejected", error=payload["error"])
            raise AuthenticationError(
                payload.get("error_description", payload["error"]),
                {"error": payload["error"]},
            )

        token = _string_field(response, payload, "access_token")
        scope = payload.get("scope")
        scopes = [s for s in scope.split(",") if s] if isinstance(scope, str) else []
        logger.info("github.token_issued", scopes=scopes)
        return GitAuth(token=token, scopes=scopes)

    async def get_username(self, token: str) -> str:
        """Resolve the login of the user owning ``token``."""
        async with self._client() as client:
            try:
                response = await client.get(
                    f"{settings.github_api_url}/user",
                    headers={"Authorization": f"token {token}"},
                )
            except httpx.HTTPError as exc:
                raise GitHubAPIError(str(exc)) from exc

        if response.status_code == 401:
            raise AuthenticationError("GitHub rejected the token")
        if response.status_code != 200:
            raise GitHubAPIError("user lookup failed", response.status_code)
        return _string_field(response, _json_body(response), "login")


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise GitHubAPIError("unexpected response", response.status_code) from exc
    if not isinstance(payload, dict):
        raise GitHubAPIError("unexpected response", response.status_code)
    return payload


def _string_field(response: httpx.Response, payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        logger.warning("github.unexpected_response", missing=key)
        raise GitHubAPIError("unexpected response", response.status_code)
    return value


_github_client: GitHubClient | None = None


def get_github_client() -> GitHubClient:
    """Get the GitHub client singleton."""
    global _github_client
    if _github_client is None:
        _github_client = GitHubClient()
    return _github_client
