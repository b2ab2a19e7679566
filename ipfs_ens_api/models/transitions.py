"""Transition values recorded as each pipeline stage completes."""

import time
from typing import Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ipfs_ens_api.models.states import (
    ENS_STAGES,
    IPFS_STAGES,
    PIPELINE_STAGES,
    StageName,
)

# JSON number: ints and floats, but never bools or numeric strings.
Number = Union[StrictInt, StrictFloat]


def now_timestamp() -> str:
    """Milliseconds since the epoch, as the string stored on records."""
    return str(int(time.time() * 1000))


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )


class PipelineTransition(WireModel):
    """Completion of a source or build stage."""

    timestamp: StrictStr
    size: Number


class IpfsTransition(WireModel):
    """Publication of the build output to IPFS."""

    timestamp: StrictStr
    hash: StrictStr


class EnsTransition(WireModel):
    """An ENS transaction, pending until its confirmation pair is set.

    ``block_number`` and ``confirmation_timestamp`` form one optional unit:
    either both are absent (submitted) or both are present (confirmed).
    """

    timestamp: StrictStr
    tx_hash: StrictStr
    nonce: Number
    block_number: Number | None = None
    confirmation_timestamp: StrictStr | None = None

    @model_validator(mode="after")
    def _check_confirmation_pair(self) -> "EnsTransition":
        if (self.block_number is None) != (self.confirmation_timestamp is None):
            raise ValueError(
                "blockNumber and confirmationTimestamp must be set together"
            )
        return self

    @property
    def is_confirmed(self) -> bool:
        return self.block_number is not None

    def confirm(
        self, block_number: int, timestamp: str | None = None
    ) -> "EnsTransition":
        """Return a copy carrying the confirmation pair."""
        return EnsTransition(
            timestamp=self.timestamp,
            tx_hash=self.tx_hash,
            nonce=self.nonce,
            block_number=block_number,
            confirmation_timestamp=timestamp or now_timestamp(),
        )


Transition = Union[PipelineTransition, IpfsTransition, EnsTransition]

TRANSITION_SHAPES: dict[StageName, type[WireModel]] = {
    **{stage: PipelineTransition for stage in PIPELINE_STAGES},
    **{stage: IpfsTransition for stage in IPFS_STAGES},
    **{stage: EnsTransition for stage in ENS_STAGES},
}

STAGE_ATTRIBUTES: dict[StageName, str] = {
    StageName.SOURCE: "source",
    StageName.BUILD: "build",
    StageName.IPFS: "ipfs",
    StageName.ENS_REGISTER: "ens_register",
    StageName.ENS_SET_RESOLVER: "ens_set_resolver",
    StageName.ENS_SET_CONTENT: "ens_set_content",
}


class Transitions(WireModel):
    """Per-stage transition slots. A slot is filled once and never cleared."""

    source: PipelineTransition | None = None
    build: PipelineTransition | None = None
    ipfs: IpfsTransition | None = None
    ens_register: EnsTransition | None = None
    ens_set_resolver: EnsTransition | None = None
    ens_set_content: EnsTransition | None = None

    def get(self, stage: StageName | str) -> Transition | None:
        return getattr(self, STAGE_ATTRIBUTES[StageName(stage)])

    def set(self, stage: StageName | str, transition: Transition) -> None:
        setattr(self, STAGE_ATTRIBUTES[StageName(stage)], transition)

    def recorded(self) -> list[StageName]:
        """Stages with a filled slot, in pipeline order."""
        return [stage for stage in StageName if self.get(stage) is not None]


class TransitionFailure(WireModel):
    """Terminal failure of a stage; stalls the record."""

    transition: StageName
    message: StrictStr
    timestamp: StrictStr
