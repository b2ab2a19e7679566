"""Deployment data models."""

from typing import Any

from pydantic import StrictStr

from ipfs_ens_api.core.exceptions import TransitionOrderError
from ipfs_ens_api.models.states import (
    STAGE_STATES,
    DeployState,
    SourceProvider,
    StageName,
    next_deploy_state,
)
from ipfs_ens_api.models.transitions import (
    TRANSITION_SHAPES,
    EnsTransition,
    Transition,
    TransitionFailure,
    Transitions,
    WireModel,
    now_timestamp,
)


class DeployArgs(WireModel):
    """Arguments a client submits to create a deployment."""

    package_dir: StrictStr
    build_dir: StrictStr
    owner: StrictStr
    repo: StrictStr
    branch: StrictStr
    ens_name: StrictStr
    source_provider: StrictStr
    env_vars: dict[StrictStr, StrictStr] | None = None

    def blank_fields(self) -> list[str]:
        """Names of required string fields left empty."""
        return [
            name
            for name in DEPLOY_ARGS_FIELDS
            if isinstance(getattr(self, name), str) and not getattr(self, name)
        ]


DEPLOY_ARGS_FIELDS = (
    "package_dir",
    "build_dir",
    "owner",
    "repo",
    "branch",
    "ens_name",
    "source_provider",
)
DEPLOY_ARGS_KEYS = {*DEPLOY_ARGS_FIELDS, "env_vars"}


def new_deploy_args() -> DeployArgs:
    return DeployArgs(
        package_dir="",
        build_dir="",
        owner="",
        repo="",
        branch="",
        ens_name="",
        source_provider=SourceProvider.GITHUB.value,
    )


class DeployItem(DeployArgs):
    """A deployment record with its progress through the pipeline."""

    created_at: StrictStr
    updated_at: StrictStr
    username: StrictStr
    codepipeline_name: StrictStr
    state: DeployState
    transitions: Transitions
    transition_error: TransitionFailure | None = None

    @classmethod
    def from_args(
        cls, args: DeployArgs, username: str, codepipeline_name: str
    ) -> "DeployItem":
        """Create the initial record for submitted arguments."""
        now = now_timestamp()
        return cls(
            **args.model_dump(include=DEPLOY_ARGS_KEYS, by_alias=False),
            created_at=now,
            updated_at=now,
            username=username,
            codepipeline_name=codepipeline_name,
            state=DeployState.FETCHING_SOURCE,
            transitions=Transitions(),
        )

    @property
    def failed(self) -> bool:
        return self.transition_error is not None

    def touch(self) -> None:
        self.updated_at = now_timestamp()

    def record_transition(self, stage: StageName | str, transition: Transition) -> None:
        """Fill the slot for ``stage`` and advance the state."""
        stage = StageName(stage)
        self._ensure_open(stage)

        if STAGE_STATES[stage] != self.state:
            raise TransitionOrderError(
                stage.value,
                f"record is in state {self.state.value}",
            )
        if self.transitions.get(stage) is not None:
            raise TransitionOrderError(stage.value, "transition already recorded")

        expected = TRANSITION_SHAPES[stage]
        if not isinstance(transition, expected):
            raise TransitionOrderError(
                stage.value,
                f"expected {expected.__name__}, got {type(transition).__name__}",
            )

        self.transitions.set(stage, transition)
        self.state = next_deploy_state(self.state)
        self.touch()

    def confirm_ens(
        self,
        stage: StageName | str,
        block_number: int,
        timestamp: str | None = None,
    ) -> EnsTransition:
        """Attach the confirmation pair to a recorded ENS transaction."""
        stage = StageName(stage)
        current = self.transitions.get(stage)
        if not isinstance(current, EnsTransition):
            raise TransitionOrderError(stage.value, "no ENS transaction recorded")
        if current.is_confirmed:
            raise TransitionOrderError(stage.value, "transaction already confirmed")

        confirmed = current.confirm(block_number, timestamp)
        self.transitions.set(stage, confirmed)
        self.touch()
        return confirmed

    def record_failure(self, stage: StageName | str, message: str) -> None:
        """Stall the record on a failed stage."""
        stage = StageName(stage)
        self._ensure_open(stage)
        self.transition_error = TransitionFailure(
            transition=stage,
            message=message,
            timestamp=now_timestamp(),
        )
        self.touch()

    def mark_available(self) -> None:
        """Finish propagation once the name resolves to the published content."""
        if self.failed:
            raise TransitionOrderError("available", "record has failed")
        if self.state != DeployState.PROPAGATING:
            raise TransitionOrderError(
                "available", f"record is in state {self.state.value}"
            )
        self.state = next_deploy_state(self.state)
        self.touch()

    def to_wire(self) -> dict[str, Any]:
        """Persisted/JSON form: camelCase keys, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _ensure_open(self, stage: StageName) -> None:
        if self.failed:
            raise TransitionOrderError(
                stage.value,
                f"record failed at {self.transition_error.transition.value}",
            )


def new_deploy_item() -> DeployItem:
    return DeployItem.from_args(new_deploy_args(), username="", codepipeline_name="")
