import asyncio

import pytest

from cmpkg_tool.api.exceptions import (
    FolderNotFoundError,
    InvalidEnvironmentError,
    MissingCredentialsError,
)
from cmpkg_tool.models import NotifyResult, OutcomeStatus, ToolConfig
from cmpkg_tool.services.deploy_service import DeployService

from .conftest import CREDENTIALS_ENV, FakeMarketplace, FakeStorage


def make_service(storage=None, marketplace=None, config=None):
    storage = storage or FakeStorage()
    created = []

    def factory(bucket, credentials):
        created.append((bucket, credentials))
        return storage

    service = DeployService(
        config=config,
        marketplace_client=marketplace or FakeMarketplace(),
        storage_factory=factory,
    )
    service.created = created
    return service


@pytest.fixture
def two_units(deploy_folder, add_unit):
    add_unit(deploy_folder, "a.dat", {"nome": "alpha", "versao": "1.0"}, "alpha_1_0.cmpkg")
    add_unit(deploy_folder, "b.dat", {"nome": "beta", "versao": "2.0", "develop": True}, "beta_2_0.cmpkg")
    return deploy_folder


class TestDeployServicePreflight:

    @pytest.mark.asyncio
    async def test_invalid_environment(self, two_units):
        service = make_service()
        with pytest.raises(InvalidEnvironmentError):
            await service.run(two_units, "production", environ=CREDENTIALS_ENV)
        assert service.created == []

    @pytest.mark.asyncio
    async def test_missing_credentials(self, two_units):
        service = make_service()
        with pytest.raises(MissingCredentialsError):
            await service.run(two_units, "producao", environ={})
        assert service.created == []

    @pytest.mark.asyncio
    async def test_missing_folder(self, tmp_path):
        service = make_service()
        with pytest.raises(FolderNotFoundError):
            await service.run(tmp_path / "nope", "producao", environ=CREDENTIALS_ENV)

    @pytest.mark.asyncio
    async def test_storage_created_with_config_bucket(self, two_units):
        config = ToolConfig(bucket="other-bucket", default_region="sa-east-1")
        service = make_service(config=config)

        await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        bucket, credentials = service.created[0]
        assert bucket == "other-bucket"
        assert credentials.access_key == "AKIATEST"
        assert credentials.region == "sa-east-1"


class TestDeployServiceRun:

    @pytest.mark.asyncio
    async def test_uploads_and_notifies(self, two_units):
        storage = FakeStorage()
        marketplace = FakeMarketplace()
        service = make_service(storage, marketplace)

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert [o.unit.package_name for o in run.sent] == ["alpha", "beta"]
        assert run.skipped == [] and run.failed == []
        assert [key for _, key, _, _ in storage.uploads] == [
            "packages/alpha_1_0.cmpkg",
            "packages-dev/beta_2_0.cmpkg",
        ]
        assert storage.uploads[0][3] == "application/zip"
        assert storage.uploads[0][2]["nome"] == "alpha"
        assert run.sent[0].url == "https://ncr-colibri.s3.amazonaws.com/packages/alpha_1_0.cmpkg"
        assert [base for base, _ in marketplace.calls] == ["https://marketplace.ncrcolibri.com.br"] * 2
        assert run.environment == "producao"
        assert run.total == 2

    @pytest.mark.asyncio
    async def test_stage_override_routes_release_builds(self, two_units):
        storage = FakeStorage()
        service = make_service(storage)
        environ = dict(CREDENTIALS_ENV, STAGE="true")

        await service.run(two_units, "producao", environ=environ)

        assert [key for _, key, _, _ in storage.uploads] == [
            "packages-stage/alpha_1_0.cmpkg",
            "packages-dev/beta_2_0.cmpkg",
        ]

    @pytest.mark.asyncio
    async def test_existing_object_is_skipped(self, two_units):
        storage = FakeStorage(existing={"packages/alpha_1_0.cmpkg"})
        marketplace = FakeMarketplace()
        service = make_service(storage, marketplace)

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert [o.unit.package_name for o in run.skipped] == ["alpha"]
        assert run.skipped[0].reason == "already exists"
        assert [key for _, key, _, _ in storage.uploads] == ["packages-dev/beta_2_0.cmpkg"]
        assert [unit.package_name for _, unit in marketplace.calls] == ["beta"]

    @pytest.mark.asyncio
    async def test_force_skips_existence_check(self, two_units):
        storage = FakeStorage(existing={"packages/alpha_1_0.cmpkg"})
        service = make_service(storage)

        run = await service.run(two_units, "producao", force=True, environ=CREDENTIALS_ENV)

        assert storage.exists_calls == []
        assert len(run.sent) == 2

    @pytest.mark.asyncio
    async def test_upload_failure_does_not_stop_run(self, two_units):
        storage = FakeStorage(fail_upload={"packages/alpha_1_0.cmpkg"})
        marketplace = FakeMarketplace()
        service = make_service(storage, marketplace)

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert [o.unit.package_name for o in run.failed] == ["alpha"]
        assert run.failed[0].reason == "connection reset"
        assert [o.unit.package_name for o in run.sent] == ["beta"]
        assert [unit.package_name for _, unit in marketplace.calls] == ["beta"]
        assert run.has_failures

    @pytest.mark.asyncio
    async def test_existence_check_failure_marks_unit_failed(self, two_units):
        storage = FakeStorage(fail_exists={"packages/alpha_1_0.cmpkg"})
        service = make_service(storage)

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert "Access denied" in run.failed[0].reason
        assert len(run.sent) == 1

    @pytest.mark.asyncio
    async def test_notify_failure_is_a_warning(self, two_units):
        marketplace = FakeMarketplace(NotifyResult(success=False, status=500, reason="boom"))
        service = make_service(marketplace=marketplace)

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert len(run.sent) == 2
        assert run.failed == []
        assert len(run.warnings) == 2
        assert "alpha_1_0.cmpkg: marketplace notify failed (HTTP 500: boom)" in run.warnings

    @pytest.mark.asyncio
    async def test_explicit_marketplace_url(self, two_units):
        marketplace = FakeMarketplace()
        service = make_service(marketplace=marketplace)

        run = await service.run(
            two_units, "desenvolvimento",
            marketplace_url="https://mk.local",
            environ=CREDENTIALS_ENV
        )

        assert run.marketplace_url == "https://mk.local"
        assert marketplace.calls[0][0] == "https://mk.local"

    @pytest.mark.asyncio
    async def test_discovery_problems_are_reported(self, two_units, add_unit):
        add_unit(two_units, "c.dat", {"versao": "1"})
        service = make_service()

        run = await service.run(two_units, "producao", environ=CREDENTIALS_ENV)

        assert len(run.errors) == 1
        assert run.errors[0].startswith("c.dat")
        assert len(run.sent) == 2

    @pytest.mark.asyncio
    async def test_cancel_between_units(self, two_units):
        cancel_event = asyncio.Event()
        marketplace = FakeMarketplace(on_notify=lambda unit: cancel_event.set())
        storage = FakeStorage()
        service = make_service(storage, marketplace)

        run = await service.run(
            two_units, "producao",
            cancel_event=cancel_event,
            environ=CREDENTIALS_ENV
        )

        assert run.cancelled
        assert [o.unit.package_name for o in run.sent] == ["alpha"]
        assert len(storage.uploads) == 1


class TestSimulatedDeploy:

    @pytest.mark.asyncio
    async def test_no_credentials_or_network(self, two_units):
        marketplace = FakeMarketplace()
        service = make_service(marketplace=marketplace)

        run = await service.run(two_units, "producao", simulated=True, environ={})

        assert service.created == []
        assert marketplace.calls == []
        assert run.simulated
        assert [o.status for o in run.sent] == [OutcomeStatus.SENT, OutcomeStatus.SENT]
        assert [o.url for o in run.sent] == [
            "https://ncr-colibri.s3.amazonaws.com/packages/alpha_1_0.cmpkg",
            "https://ncr-colibri.s3.amazonaws.com/packages-dev/beta_2_0.cmpkg",
        ]

    @pytest.mark.asyncio
    async def test_empty_folder(self, deploy_folder):
        run = await make_service().run(deploy_folder, "stage", simulated=True, environ={})
        assert run.total == 0
        assert run.marketplace_url == "https://qa-marketplace.ncrcolibri.com.br"
