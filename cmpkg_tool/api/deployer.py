"""Deployer API for deployment operations"""

import asyncio
from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_ENVIRONMENT, KEY_NAME, KEY_VERSION
from ..core.environment import resolve_marketplace_url, validate_environment
from ..models import DeployRun, NotifyResult, ToolConfig
from ..services.deploy_service import DeployService
from ..services.manifest_service import ManifestService
from ..services.marketplace import MarketplaceClient, TokenSigner
from ..utils.async_utils import run_async

PathLike = Union[str, Path]


class Deployer:
    """Deployer class for deployment operations"""

    def __init__(self,
                 config: Optional[ToolConfig] = None,
                 deploy_service: Optional[DeployService] = None,
                 marketplace_client: Optional[MarketplaceClient] = None):
        """
        Initialize deployer

        Args:
            config: Tool configuration
            deploy_service: Deploy service, built from config by default
            marketplace_client: Marketplace client, built from config by default
        """
        self.config = config or ToolConfig()
        self.marketplace_client = marketplace_client or MarketplaceClient(
            TokenSigner(self.config.jwt_secret, self.config.token_ttl_minutes),
            timeout=self.config.notify_timeout
        )
        self.deploy_service = deploy_service or DeployService(
            self.config,
            marketplace_client=self.marketplace_client
        )
        self.manifest_service = ManifestService()

    def deploy(self,
               folder: PathLike,
               environment: str = DEFAULT_ENVIRONMENT,
               cancel_event: Optional[asyncio.Event] = None,
               **options) -> DeployRun:
        """
        Deploy every package of a folder

        Args:
            folder: Deploy folder
            environment: desenvolvimento, producao or stage
            cancel_event: Stops the run between units when set
            **options: marketplace_url, simulated, force, access_key,
                secret_key, region

        Returns:
            DeployRun: Deploy run aggregate

        Raises:
            InvalidEnvironmentError: If environment is not valid
            MissingCredentialsError: If credentials are missing
            FolderNotFoundError: If folder does not exist
        """
        return run_async(self.deploy_async(folder, environment, cancel_event, **options))

    async def deploy_async(self,
                           folder: PathLike,
                           environment: str = DEFAULT_ENVIRONMENT,
                           cancel_event: Optional[asyncio.Event] = None,
                           **options) -> DeployRun:
        """Async variant of deploy()"""
        return await self.deploy_service.run(
            Path(folder),
            environment,
            cancel_event=cancel_event,
            **options
        )

    def notify(self,
               folder: PathLike,
               environment: str = DEFAULT_ENVIRONMENT,
               marketplace_url: Optional[str] = None) -> NotifyResult:
        """
        Notify the marketplace with the manifesto.dat of a folder

        Raises:
            InvalidEnvironmentError: If environment is not valid
            ManifestNotFoundError: If manifesto.dat is missing
            ManifestFormatError: If manifesto.dat is not valid
        """
        return run_async(self.notify_async(folder, environment, marketplace_url))

    async def notify_async(self,
                           folder: PathLike,
                           environment: str = DEFAULT_ENVIRONMENT,
                           marketplace_url: Optional[str] = None) -> NotifyResult:
        """Async variant of notify()"""
        environment = validate_environment(environment)
        base_url = resolve_marketplace_url(environment, marketplace_url, self.config)

        payload = await self.manifest_service.read_deploy_payload(Path(folder))
        return await self.marketplace_client.notify(
            base_url,
            payload[KEY_NAME],
            payload[KEY_VERSION],
            payload
        )


def deploy(folder: PathLike, environment: str = DEFAULT_ENVIRONMENT, **options) -> DeployRun:
    """
    Deploy a folder (convenience function)

    Args:
        folder: Deploy folder
        environment: Target environment
        **options: See Deployer.deploy()

    Returns:
        DeployRun: Deploy run aggregate
    """
    return Deployer().deploy(folder, environment, **options)
