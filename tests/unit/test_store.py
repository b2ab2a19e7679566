"""Unit tests for the deployment store."""

import asyncio

import pytest

from ipfs_ens_api.core.exceptions import (
    DeploymentExistsError,
    DeploymentNotFoundError,
    InvalidPayloadError,
    TransitionOrderError,
)
from ipfs_ens_api.core.store import DeploymentStore, load_item
from ipfs_ens_api.core.validators import is_deploy_item
from ipfs_ens_api.models.deployment import DeployArgs
from ipfs_ens_api.models.states import DeployState, StageName
from ipfs_ens_api.models.transitions import (
    EnsTransition,
    IpfsTransition,
    PipelineTransition,
)


class TestDeploymentStore:
    """Tests for DeploymentStore."""

    @pytest.mark.asyncio
    async def test_create_deployment(self, store: DeploymentStore, deploy_args: DeployArgs):
        item = await store.create_deployment(deploy_args, username="alice")

        assert item.username == "alice"
        assert item.codepipeline_name == "test-alice-homepage"
        assert item.state == DeployState.FETCHING_SOURCE

    @pytest.mark.asyncio
    async def test_duplicate_name(self, store: DeploymentStore, deploy_args: DeployArgs):
        await store.create_deployment(deploy_args, username="alice")
        with pytest.raises(DeploymentExistsError):
            await store.create_deployment(deploy_args, username="bob")

    @pytest.mark.asyncio
    async def test_get_deployment(self, store: DeploymentStore, deploy_args: DeployArgs):
        created = await store.create_deployment(deploy_args, username="alice")
        retrieved = await store.get_deployment("alice-homepage")

        assert retrieved == created
        assert await store.get_deployment("missing") is None

    @pytest.mark.asyncio
    async def test_list_deployments(self, store: DeploymentStore, deploy_args: DeployArgs):
        await store.create_deployment(deploy_args, username="alice")
        other = deploy_args.model_copy(update={"ens_name": "bob-blog"})
        await store.create_deployment(other, username="bob")

        assert len(await store.list_deployments()) == 2
        mine = await store.list_deployments(username="bob")
        assert [item.ens_name for item in mine] == ["bob-blog"]

    @pytest.mark.asyncio
    async def test_record_transition(self, store: DeploymentStore, deploy_args: DeployArgs):
        await store.create_deployment(deploy_args, username="alice")

        item = await store.record_transition(
            "alice-homepage",
            StageName.SOURCE,
            PipelineTransition(timestamp="1", size=512),
        )

        assert item.state == DeployState.BUILDING_SOURCE
        stored = await store.get_deployment("alice-homepage")
        assert stored.transitions.source.size == 512
        assert stored.state == DeployState.BUILDING_SOURCE

    @pytest.mark.asyncio
    async def test_rejected_transition_leaves_record(
        self, store: DeploymentStore, deploy_args: DeployArgs
    ):
        await store.create_deployment(deploy_args, username="alice")

        with pytest.raises(TransitionOrderError):
            await store.record_transition(
                "alice-homepage",
                StageName.BUILD,
                PipelineTransition(timestamp="1", size=512),
            )

        stored = await store.get_deployment("alice-homepage")
        assert stored.state == DeployState.FETCHING_SOURCE
        assert stored.transitions.recorded() == []

    @pytest.mark.asyncio
    async def test_unknown_record(self, store: DeploymentStore):
        with pytest.raises(DeploymentNotFoundError):
            await store.record_failure("missing", StageName.SOURCE, "clone failed")

    @pytest.mark.asyncio
    async def test_failure_and_confirmation(
        self, store: DeploymentStore, deploy_args: DeployArgs
    ):
        await store.create_deployment(deploy_args, username="alice")
        name = "alice-homepage"
        await store.record_transition(name, "source", PipelineTransition(timestamp="1", size=1))
        await store.record_transition(name, "build", PipelineTransition(timestamp="2", size=2))

        await store.record_transition(name, "ipfs", IpfsTransition(timestamp="3", hash="Qm"))
        await store.record_transition(
            name, "ensRegister", EnsTransition(timestamp="3", tx_hash="0x1", nonce=4)
        )
        confirmed = await store.confirm_ens(name, "ensRegister", 99, "4")
        assert confirmed.block_number == 99

        item = await store.record_failure(name, "ensSetResolver", "nonce too low")
        assert item.failed
        assert item.transitions.ens_register.confirmation_timestamp == "4"

    @pytest.mark.asyncio
    async def test_concurrent_writes_are_serialized(
        self, store: DeploymentStore, deploy_args: DeployArgs
    ):
        await store.create_deployment(deploy_args, username="alice")
        source = PipelineTransition(timestamp="1", size=1)

        results = await asyncio.gather(
            *[
                store.record_transition("alice-homepage", StageName.SOURCE, source)
                for _ in range(5)
            ],
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, TransitionOrderError)]
        assert len(failures) == 4
        stored = await store.get_deployment("alice-homepage")
        assert stored.state == DeployState.BUILDING_SOURCE


class TestLoadItem:
    def test_loads_valid_record(self, deploy_item_payload):
        item = load_item(deploy_item_payload)
        assert item.state == DeployState.SETTING_RESOLVER_ENS
        assert is_deploy_item(item.to_wire())

    def test_rejects_record_without_known_state(self, deploy_item_payload):
        """Test a well-shaped record the store cannot place in the lifecycle."""
        deploy_item_payload["state"] = "PAUSED"
        with pytest.raises(InvalidPayloadError) as exc_info:
            load_item(deploy_item_payload)
        assert exc_info.value.details["problems"] == [
            "state: unknown lifecycle state 'PAUSED'"
        ]

    def test_rejects_malformed_record(self, deploy_item_payload):
        deploy_item_payload["transitions"]["ipfs"] = {"timestamp": "1"}
        with pytest.raises(InvalidPayloadError) as exc_info:
            load_item(deploy_item_payload)
        assert exc_info.value.details["problems"]
