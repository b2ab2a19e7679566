"""Login endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Body

from ipfs_ens_api.api.deps import GitHubDep
from ipfs_ens_api.core.exceptions import InvalidPayloadError
from ipfs_ens_api.core.validators import is_login_args
from ipfs_ens_api.models.responses import ApiResponse, GitAuth

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[GitAuth],
    summary="Exchange a GitHub OAuth code for a token",
)
async def login(
    payload: Annotated[Any, Body()],
    github: GitHubDep,
) -> ApiResponse[GitAuth]:
    if not is_login_args(payload):
        raise InvalidPayloadError("Login requires a string 'code'", ["code: required"])
    auth = await github.exchange_code(payload["code"])
    return ApiResponse(data=auth)
