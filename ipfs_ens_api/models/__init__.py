"""Data models for the IPFS-ENS deployment API."""

from ipfs_ens_api.models.deployment import (
    DeployArgs,
    DeployItem,
    new_deploy_args,
    new_deploy_item,
)
from ipfs_ens_api.models.responses import (
    ApiError,
    ApiResponse,
    FoundResult,
    GitAuth,
    ListDeploymentsResult,
    LoginArgs,
    MessageResult,
    NotFoundResult,
    ReadDeploymentResult,
)
from ipfs_ens_api.models.states import (
    NEXT_DEPLOY_STATE,
    DeployState,
    SourceProvider,
    StageName,
    next_deploy_state,
)
from ipfs_ens_api.models.transitions import (
    EnsTransition,
    IpfsTransition,
    PipelineTransition,
    Transition,
    TransitionFailure,
    Transitions,
)

__all__ = [
    # Lifecycle
    "DeployState",
    "NEXT_DEPLOY_STATE",
    "SourceProvider",
    "StageName",
    "next_deploy_state",
    # Transitions
    "EnsTransition",
    "IpfsTransition",
    "PipelineTransition",
    "Transition",
    "TransitionFailure",
    "Transitions",
    # Deployment records
    "DeployArgs",
    "DeployItem",
    "new_deploy_args",
    "new_deploy_item",
    # Envelopes
    "ApiError",
    "ApiResponse",
    "FoundResult",
    "GitAuth",
    "ListDeploymentsResult",
    "LoginArgs",
    "MessageResult",
    "NotFoundResult",
    "ReadDeploymentResult",
]
