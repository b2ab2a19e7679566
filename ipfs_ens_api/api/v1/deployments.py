"""Deployment endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from pydantic.alias_generators import to_camel

from ipfs_ens_api.api.deps import StoreDep, UserDep
from ipfs_ens_api.core.exceptions import InvalidPayloadError
from ipfs_ens_api.core.validators import explain_deploy_args, is_source_provider
from ipfs_ens_api.models.deployment import DeployArgs
from ipfs_ens_api.models.responses import (
    ApiResponse,
    FoundResult,
    ListDeploymentsResult,
    MessageResult,
    NotFoundResult,
    ReadDeploymentResult,
)

router = APIRouter()


def parse_deploy_args(payload: Any) -> DeployArgs:
    """Turn a request body into DeployArgs or raise InvalidPayloadError."""
    problems = explain_deploy_args(payload)
    if problems:
        raise InvalidPayloadError("Invalid deployment arguments", problems)

    args = DeployArgs.model_validate(payload)
    blank = args.blank_fields()
    if blank:
        raise InvalidPayloadError(
            "Deployment arguments must not be empty",
            [f"{to_camel(name)}: must not be empty" for name in blank],
        )
    if not is_source_provider(args.source_provider):
        raise InvalidPayloadError(
            "Unsupported source provider",
            [f"sourceProvider: unknown provider '{args.source_provider}'"],
        )
    return args


async def _create(payload: Any, user: str, store: StoreDep) -> ApiResponse[MessageResult]:
    args = parse_deploy_args(payload)
    item = await store.create_deployment(args, username=user)
    return ApiResponse(
        data=MessageResult(message=f"Deployment of {item.ens_name} has begun")
    )


@router.post(
    "",
    response_model=ApiResponse[MessageResult],
    status_code=status.HTTP_202_ACCEPTED,
    summary="Create a deployment",
)
async def create_deployment(
    payload: Annotated[Any, Body()],
    user: UserDep,
    store: StoreDep,
) -> ApiResponse[MessageResult]:
    """Start a deployment of a repository to an ENS name."""
    return await _create(payload, user, store)


@router.post(
    "/{name}",
    response_model=ApiResponse[MessageResult],
    status_code=status.HTTP_202_ACCEPTED,
    summary="Create a deployment at a named path",
)
async def create_named_deployment(
    name: str,
    payload: Annotated[Any, Body()],
    user: UserDep,
    store: StoreDep,
) -> ApiResponse[MessageResult]:
    """Same as the unnamed form; the path must match ``ensName``."""
    if isinstance(payload, dict) and payload.get("ensName") != name:
        raise InvalidPayloadError(
            "Path name does not match ensName",
            [f"ensName: expected '{name}'"],
        )
    return await _create(payload, user, store)


@router.get(
    "",
    response_model=ApiResponse[ListDeploymentsResult],
    summary="List your deployments",
)
async def list_deployments(
    user: UserDep,
    store: StoreDep,
) -> ApiResponse[ListDeploymentsResult]:
    items = await store.list_deployments(username=user)
    return ApiResponse(data=ListDeploymentsResult(count=len(items), items=items))


@router.get(
    "/{name}",
    response_model=ApiResponse[ReadDeploymentResult],
    summary="Read a deployment",
)
async def read_deployment(
    name: str,
    user: UserDep,
    store: StoreDep,
) -> ApiResponse[ReadDeploymentResult]:
    """Return the record, or ``exists: false`` when the caller has none by that name."""
    item = await store.get_deployment(name)
    if item is None or item.username != user:
        return ApiResponse(data=NotFoundResult())
    return ApiResponse(data=FoundResult(item=item))
