"""Custom exceptions for the IPFS-ENS deployment API."""

from typing import Any


class IpfsEnsError(Exception):
    """Base exception for the deployment API."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidPayloadError(IpfsEnsError):
    """Inbound data is not a well-formed record or argument set."""

    status_code = 400

    def __init__(self, message: str, problems: list[str] | None = None):
        details = {}
        if problems:
            details["problems"] = problems
        super().__init__(message, details)


class DeploymentNotFoundError(IpfsEnsError):
    """Deployment not found."""

    status_code = 404

    def __init__(self, name: str):
        super().__init__(
            f"Deployment not found: {name}",
            {"name": name},
        )


class DeploymentExistsError(IpfsEnsError):
    """A deployment already owns this ENS name."""

    status_code = 409

    def __init__(self, name: str):
        super().__init__(
            f"Deployment already exists: {name}",
            {"name": name},
        )


class TransitionOrderError(IpfsEnsError):
    """A stage result arrived out of order or for a stalled record."""

    status_code = 409

    def __init__(self, transition: str, reason: str):
        super().__init__(
            f"Cannot record '{transition}': {reason}",
            {"transition": transition},
        )
        self.transition = transition


class AuthenticationError(IpfsEnsError):
    """Missing or rejected GitHub credentials."""

    status_code = 401


class GitHubAPIError(IpfsEnsError):
    """GitHub answered with an unexpected error."""

    status_code = 502

    def __init__(self, message: str, status: int | None = None):
        details = {}
        if status is not None:
            details["status"] = status
        super().__init__(f"GitHub request failed: {message}", details)
