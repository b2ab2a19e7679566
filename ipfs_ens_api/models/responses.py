"""Request and response envelopes for the HTTP surface."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field, StrictStr

from ipfs_ens_api.models.deployment import DeployItem
from ipfs_ens_api.models.transitions import WireModel

T = TypeVar("T")


class ApiError(BaseModel):
    """Error body returned in place of data."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope around every API result."""

    data: T | None = None
    err: ApiError | None = None


class MessageResult(BaseModel):
    message: str


class FoundResult(BaseModel):
    exists: Literal[True] = True
    item: DeployItem


class NotFoundResult(BaseModel):
    exists: Literal[False] = False
    item: None = None


ReadDeploymentResult = FoundResult | NotFoundResult


class ListDeploymentsResult(BaseModel):
    count: int
    items: list[DeployItem]


class LoginArgs(WireModel):
    """OAuth code obtained from GitHub's authorize redirect."""

    code: StrictStr


class GitAuth(WireModel):
    """GitHub OAuth token handed back to the client."""

    token: str
    scopes: list[str] = Field(default_factory=list)
    type: Literal["token"] = "token"
    token_type: Literal["oauth"] = "oauth"
