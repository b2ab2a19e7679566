"""Structural predicates for deployment records and transitions.

Every predicate accepts any value (typically freshly parsed JSON) and answers
``True`` or ``False``. None of them raise: a rejected payload is an ordinary
outcome the caller handles. The ``explain_*`` helpers return the reasons for a
rejection and are empty exactly when the matching predicate accepts.

Predicates match the wire form only (camelCase keys).
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from ipfs_ens_api.models.deployment import DeployArgs, DeployItem
from ipfs_ens_api.models.responses import LoginArgs
from ipfs_ens_api.models.states import (
    DeployState,
    SourceProvider,
    StageName,
    expected_stages,
)
from ipfs_ens_api.models.transitions import (
    TRANSITION_SHAPES,
    EnsTransition,
    IpfsTransition,
    PipelineTransition,
)

_STAGE_NAMES = frozenset(stage.value for stage in StageName)
_SOURCE_PROVIDERS = frozenset(provider.value for provider in SourceProvider)
_DEPLOY_STATES = frozenset(state.value for state in DeployState)


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error["loc"])
    if location:
        return f"{location}: {error['msg']}"
    return error["msg"]


def _problems(model: type[BaseModel], value: Any) -> list[str]:
    if not isinstance(value, dict):
        return [f"expected an object, got {type(value).__name__}"]
    try:
        model.model_validate(value, by_alias=True, by_name=False)
    except ValidationError as exc:
        return [_format_error(error) for error in exc.errors()]
    return []


def _conforms(model: type[BaseModel], value: Any) -> bool:
    return not _problems(model, value)


# Transitions


def is_pipeline(value: Any) -> bool:
    return _conforms(PipelineTransition, value)


def is_ipfs(value: Any) -> bool:
    return _conforms(IpfsTransition, value)


def is_ens(value: Any) -> bool:
    """ENS transaction, either pending or carrying its full confirmation pair."""
    return _conforms(EnsTransition, value)


def is_any_transition(value: Any) -> bool:
    return is_pipeline(value) or is_ipfs(value) or is_ens(value)


def is_stage_name(value: Any) -> bool:
    return isinstance(value, str) and value in _STAGE_NAMES


def is_transition_for(stage: Any, value: Any) -> bool:
    """Check ``value`` against the shape paired with the ``stage`` slot."""
    if not is_stage_name(stage):
        return False
    return _conforms(TRANSITION_SHAPES[StageName(stage)], value)


# Records


def is_source_provider(value: Any) -> bool:
    return isinstance(value, str) and value in _SOURCE_PROVIDERS


def is_deploy_args(value: Any) -> bool:
    return _conforms(DeployArgs, value)


def explain_deploy_args(value: Any) -> list[str]:
    return _problems(DeployArgs, value)


class _DeployItemShape(DeployItem):
    # Record shape without the lifecycle position; see is_known_state.
    state: Any = None


def is_deploy_item(value: Any) -> bool:
    """Accept a complete deployment record.

    Absent or null transition slots are fine; a populated slot must match the
    shape paired with its stage. ``state`` is not inspected, see
    :func:`is_known_state` and :func:`state_matches_transitions`.
    """
    return _conforms(_DeployItemShape, value)


def explain_deploy_item(value: Any) -> list[str]:
    return _problems(_DeployItemShape, value)


def is_known_state(value: Any) -> bool:
    return isinstance(value, str) and value in _DEPLOY_STATES


def state_matches_transitions(value: DeployItem | Any) -> bool:
    """Whether the filled transition slots are exactly those the state implies."""
    if not isinstance(value, DeployItem):
        if not is_deploy_item(value) or not is_known_state(value.get("state")):
            return False
        value = DeployItem.model_validate(value)
    return value.transitions.recorded() == expected_stages(value.state)


# Requests


def is_login_args(value: Any) -> bool:
    return _conforms(LoginArgs, value)
