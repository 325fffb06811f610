"""Deploy service implementation"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Mapping, Optional

from ..constants import (
    ARCHIVE_CONTENT_TYPE,
    REASON_ALREADY_EXISTS,
    S3_URL_TEMPLATE,
)
from ..core.discovery import DeployUnitDiscoverer
from ..core.environment import (
    Credentials,
    is_stage_override_active,
    resolve_credentials,
    resolve_marketplace_url,
    validate_environment,
)
from ..core.routing import storage_key, storage_prefix
from ..models.config import ToolConfig
from ..models.deploy import DeployUnit
from ..models.result import DeployOutcome, DeployRun, OutcomeStatus
from ..storage.base import ObjectState, StorageBackend
from ..storage.factory import StorageFactory
from ..storage.s3 import build_metadata
from .marketplace import MarketplaceClient, TokenSigner

logger = logging.getLogger(__name__)

StorageFactoryFn = Callable[[str, Credentials], StorageBackend]


class DeployService:
    """Uploads discovered packages and notifies the marketplace"""

    def __init__(self,
                 config: Optional[ToolConfig] = None,
                 marketplace_client: Optional[MarketplaceClient] = None,
                 storage_factory: Optional[StorageFactoryFn] = None,
                 discoverer: Optional[DeployUnitDiscoverer] = None):
        """Initialize deploy service

        Args:
            config: Tool configuration
            marketplace_client: Marketplace client, built from config by default
            storage_factory: Creates the storage backend for a run
            discoverer: Deploy unit discoverer
        """
        self.config = config or ToolConfig()
        self.marketplace_client = marketplace_client or MarketplaceClient(
            TokenSigner(self.config.jwt_secret, self.config.token_ttl_minutes),
            timeout=self.config.notify_timeout
        )
        self.storage_factory = storage_factory or StorageFactory.create
        self.discoverer = discoverer or DeployUnitDiscoverer()

    async def run(self,
                  folder: Path,
                  environment: str,
                  marketplace_url: Optional[str] = None,
                  simulated: bool = False,
                  force: bool = False,
                  access_key: Optional[str] = None,
                  secret_key: Optional[str] = None,
                  region: Optional[str] = None,
                  cancel_event: Optional[asyncio.Event] = None,
                  environ: Optional[Mapping[str, str]] = None) -> DeployRun:
        """Deploy every package found in a folder

        Pre-flight problems (environment, credentials, folder) raise before
        any unit is processed. Per-unit problems are recorded on the run.

        Args:
            folder: Deploy folder with descriptors and archives
            environment: desenvolvimento, producao or stage
            marketplace_url: Explicit marketplace base URL
            simulated: Compute results without any network I/O
            force: Upload even when the object already exists
            access_key: Storage access key
            secret_key: Storage secret key
            region: Storage region
            cancel_event: Stops the run between units when set
            environ: Environment variables (defaults to os.environ)

        Returns:
            Deploy run aggregate

        Raises:
            InvalidEnvironmentError: If environment is not valid
            MissingCredentialsError: If a real run has no credentials
            FolderNotFoundError: If folder does not exist
        """
        environment = validate_environment(environment)

        storage: Optional[StorageBackend] = None
        if not simulated:
            credentials = resolve_credentials(
                access_key, secret_key, region,
                environ=environ,
                default_region=self.config.default_region
            )
            storage = self.storage_factory(self.config.bucket, credentials)

        base_url = resolve_marketplace_url(environment, marketplace_url, self.config, environ)
        stage_override = is_stage_override_active(environ)

        run = DeployRun(environment=environment, marketplace_url=base_url, simulated=simulated)
        started = time.monotonic()

        discovery = await self.discoverer.discover(Path(folder))
        run.warnings.extend(discovery.warnings)
        run.errors.extend(discovery.errors)

        logger.info(
            f"Deploying {len(discovery.units)} package(s) to {environment}"
            f"{' (simulated)' if simulated else ''}"
        )

        for unit in discovery.units:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Deploy cancelled")
                run.cancelled = True
                break

            prefix = storage_prefix(environment, unit.is_development_build, stage_override)
            key = storage_key(prefix, unit.archive_name)

            outcome = await self._deploy_unit(unit, key, storage, base_url, simulated, force, run)
            run.record(outcome)

        run.duration = time.monotonic() - started
        return run

    async def _deploy_unit(self,
                           unit: DeployUnit,
                           key: str,
                           storage: Optional[StorageBackend],
                           base_url: str,
                           simulated: bool,
                           force: bool,
                           run: DeployRun) -> DeployOutcome:
        if simulated:
            url = S3_URL_TEMPLATE.format(bucket=self.config.bucket, key=key)
            logger.info(f"[simulated] {unit.archive_name} -> {url}")
            return DeployOutcome(unit, OutcomeStatus.SENT, url=url)

        try:
            if not force and await storage.exists(key) is ObjectState.FOUND:
                logger.info(f"Skipping {unit.archive_name}: {REASON_ALREADY_EXISTS}")
                return DeployOutcome(unit, OutcomeStatus.SKIPPED, reason=REASON_ALREADY_EXISTS)

            url = await storage.upload(
                unit.archive_path,
                key,
                build_metadata(unit),
                ARCHIVE_CONTENT_TYPE
            )
        except Exception as e:
            logger.error(f"Failed to deploy {unit.archive_name}: {e}")
            return DeployOutcome(unit, OutcomeStatus.FAILED, reason=str(e) or type(e).__name__)

        logger.info(f"Uploaded {unit.archive_name} -> {url}")

        result = await self.marketplace_client.notify_unit(base_url, unit)
        if not result.success:
            message = f"{unit.archive_name}: marketplace notify failed ({result})"
            logger.warning(message)
            run.warnings.append(message)

        return DeployOutcome(unit, OutcomeStatus.SENT, url=url)
