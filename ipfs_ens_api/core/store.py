"""In-memory deployment store.

Records are kept in their wire form and parsed on every read, so anything
handed out by the store has passed :func:`is_deploy_item`. Writes to one
record are serialized by a per-name lock.
"""

import asyncio
from typing import Any, Callable, TypeVar

from ipfs_ens_api.config import settings
from ipfs_ens_api.core.exceptions import (
    DeploymentExistsError,
    DeploymentNotFoundError,
    InvalidPayloadError,
)
from ipfs_ens_api.core.validators import (
    explain_deploy_item,
    is_deploy_item,
    is_known_state,
)
from ipfs_ens_api.models.deployment import DeployArgs, DeployItem
from ipfs_ens_api.models.states import StageName
from ipfs_ens_api.models.transitions import EnsTransition, Transition
from ipfs_ens_api.utils.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


def load_item(raw: Any) -> DeployItem:
    """Parse a stored or received record, rejecting malformed ones."""
    if not is_deploy_item(raw):
        raise InvalidPayloadError(
            "Malformed deployment record",
            explain_deploy_item(raw),
        )
    if not is_known_state(raw.get("state")):
        raise InvalidPayloadError(
            "Deployment record has no known state",
            [f"state: unknown lifecycle state {raw.get('state')!r}"],
        )
    return DeployItem.model_validate(raw)


class DeploymentStore:
    """Holds deployment records keyed by ENS name."""

    def __init__(self, codepipeline_prefix: str | None = None):
        self._records: dict[str, dict[str, Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._codepipeline_prefix = (
            settings.codepipeline_prefix
            if codepipeline_prefix is None
            else codepipeline_prefix
        )

    def _lock(self, name: str) -> asyncio.Lock:
        if name not in self._locks:
            self._locks[name] = asyncio.Lock()
        return self._locks[name]

    def codepipeline_name(self, ens_name: str) -> str:
        return f"{self._codepipeline_prefix}{ens_name}"

    async def create_deployment(self, args: DeployArgs, username: str) -> DeployItem:
        """Create the initial record for ``args`` owned by ``username``."""
        async with self._lock(args.ens_name):
            if args.ens_name in self._records:
                raise DeploymentExistsError(args.ens_name)

            item = DeployItem.from_args(
                args,
                username=username,
                codepipeline_name=self.codepipeline_name(args.ens_name),
            )
            self._records[args.ens_name] = item.to_wire()

        logger.info(
            "deployment.created",
            name=item.ens_name,
            username=username,
            codepipeline=item.codepipeline_name,
        )
        return item

    async def get_deployment(self, name: str) -> DeployItem | None:
        raw = self._records.get(name)
        if raw is None:
            return None
        return load_item(raw)

    async def list_deployments(self, username: str | None = None) -> list[DeployItem]:
        """List records, newest first, optionally only those owned by ``username``."""
        items = [load_item(raw) for raw in self._records.values()]
        if username is not None:
            items = [item for item in items if item.username == username]
        items.sort(key=lambda item: int(item.created_at), reverse=True)
        return items

    async def _mutate(self, name: str, change: Callable[[DeployItem], R]) -> R:
        async with self._lock(name):
            raw = self._records.get(name)
            if raw is None:
                raise DeploymentNotFoundError(name)
            item = load_item(raw)
            result = change(item)
            self._records[name] = item.to_wire()
            return result

    async def record_transition(
        self, name: str, stage: StageName | str, transition: Transition
    ) -> DeployItem:
        """Attach a completed stage's transition and advance the record."""

        def change(item: DeployItem) -> DeployItem:
            item.record_transition(stage, transition)
            return item

        item = await self._mutate(name, change)
        logger.info(
            "deployment.transition_recorded",
            name=name,
            transition=StageName(stage).value,
            state=item.state.value,
        )
        return item

    async def confirm_ens(
        self,
        name: str,
        stage: StageName | str,
        block_number: int,
        timestamp: str | None = None,
    ) -> EnsTransition:
        confirmed = await self._mutate(
            name, lambda item: item.confirm_ens(stage, block_number, timestamp)
        )
        logger.info(
            "deployment.ens_confirmed",
            name=name,
            transition=StageName(stage).value,
            block_number=block_number,
        )
        return confirmed

    async def record_failure(
        self, name: str, stage: StageName | str, message: str
    ) -> DeployItem:
        """Stall a record on a failed stage."""

        def change(item: DeployItem) -> DeployItem:
            item.record_failure(stage, message)
            return item

        item = await self._mutate(name, change)
        logger.warning(
            "deployment.transition_failed",
            name=name,
            transition=StageName(stage).value,
            message=message,
        )
        return item

    async def mark_available(self, name: str) -> DeployItem:
        def change(item: DeployItem) -> DeployItem:
            item.mark_available()
            return item

        item = await self._mutate(name, change)
        logger.info("deployment.available", name=name)
        return item

    def clear(self) -> None:
        self._records.clear()
        self._locks.clear()


_deployment_store: DeploymentStore | None = None


def get_deployment_store() -> DeploymentStore:
    """Get the deployment store singleton."""
    global _deployment_store
    if _deployment_store is None:
        _deployment_store = DeploymentStore()
    return _deployment_store
