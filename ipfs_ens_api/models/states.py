"""Deployment lifecycle states and stage names."""

from enum import Enum


class SourceProvider(str, Enum):
    """Where deployment sources are fetched from."""

    GITHUB = "GitHub"


class StageName(str, Enum):
    """Transition slots on a deployment record, in pipeline order."""

    SOURCE = "source"
    BUILD = "build"
    IPFS = "ipfs"
    ENS_REGISTER = "ensRegister"
    ENS_SET_RESOLVER = "ensSetResolver"
    ENS_SET_CONTENT = "ensSetContent"


PIPELINE_STAGES = (StageName.SOURCE, StageName.BUILD)
IPFS_STAGES = (StageName.IPFS,)
ENS_STAGES = (
    StageName.ENS_REGISTER,
    StageName.ENS_SET_RESOLVER,
    StageName.ENS_SET_CONTENT,
)


class DeployState(str, Enum):
    """Position of a deployment in its lifecycle."""

    FETCHING_SOURCE = "FETCHING_SOURCE"
    BUILDING_SOURCE = "BUILDING_SOURCE"
    DEPLOYING_IPFS = "DEPLOYING_IPFS"
    REGISTERING_ENS = "REGISTERING_ENS"
    SETTING_RESOLVER_ENS = "SETTING_RESOLVER_ENS"
    SETTING_CONTENT_ENS = "SETTING_CONTENT_ENS"
    PROPAGATING = "PROPAGATING"
    AVAILABLE = "AVAILABLE"


NEXT_DEPLOY_STATE: dict[DeployState, DeployState] = {
    DeployState.FETCHING_SOURCE: DeployState.BUILDING_SOURCE,
    DeployState.BUILDING_SOURCE: DeployState.DEPLOYING_IPFS,
    DeployState.DEPLOYING_IPFS: DeployState.REGISTERING_ENS,
    DeployState.REGISTERING_ENS: DeployState.SETTING_RESOLVER_ENS,
    DeployState.SETTING_RESOLVER_ENS: DeployState.SETTING_CONTENT_ENS,
    DeployState.SETTING_CONTENT_ENS: DeployState.PROPAGATING,
    DeployState.PROPAGATING: DeployState.AVAILABLE,
    DeployState.AVAILABLE: DeployState.AVAILABLE,
}

# State in which each stage runs; completing it moves the record to the next state.
STAGE_STATES: dict[StageName, DeployState] = {
    StageName.SOURCE: DeployState.FETCHING_SOURCE,
    StageName.BUILD: DeployState.BUILDING_SOURCE,
    StageName.IPFS: DeployState.DEPLOYING_IPFS,
    StageName.ENS_REGISTER: DeployState.REGISTERING_ENS,
    StageName.ENS_SET_RESOLVER: DeployState.SETTING_RESOLVER_ENS,
    StageName.ENS_SET_CONTENT: DeployState.SETTING_CONTENT_ENS,
}

_STATE_ORDER = list(DeployState)


def next_deploy_state(state: DeployState | str) -> DeployState:
    """Return the state that follows ``state``. AVAILABLE maps to itself."""
    return NEXT_DEPLOY_STATE[DeployState(state)]


def stage_for_state(state: DeployState | str) -> StageName | None:
    """Return the stage that runs in ``state``, if any."""
    state = DeployState(state)
    for stage, stage_state in STAGE_STATES.items():
        if stage_state == state:
            return stage
    return None


def expected_stages(state: DeployState | str) -> list[StageName]:
    """Stages whose transitions must be recorded once a record reaches ``state``."""
    position = _STATE_ORDER.index(DeployState(state))
    return [
        stage
        for stage, stage_state in STAGE_STATES.items()
        if _STATE_ORDER.index(stage_state) < position
    ]
