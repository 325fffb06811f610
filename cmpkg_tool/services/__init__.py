"""Services for cmpkg-tool"""

from .config_service import ConfigService
from .manifest_service import ManifestService
from .marketplace import MarketplaceClient, TokenSigner
from .deploy_service import DeployService
from .package_service import PackageService
from .scripts_service import ScriptsService

__all__ = [
    "ConfigService",
    "ManifestService",
    "MarketplaceClient",
    "TokenSigner",
    "DeployService",
    "PackageService",
    "ScriptsService",
]
