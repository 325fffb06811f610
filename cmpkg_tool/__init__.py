"""cmpkg-tool - packaging and deployment of .cmpkg release archives.

Packages release folders into .cmpkg archives from a declarative manifest,
uploads them to S3 and notifies the marketplace.
"""

from .__version__ import __version__, __version_info__, __license__

# Core API
from .api.packer import Packer, pack
from .api.deployer import Deployer, deploy

# Data models
from .models import (
    Manifest,
    ResolvedManifest,
    DeployUnit,
    DeployRun,
    DeployOutcome,
    OutcomeStatus,
    PackResult,
    ScriptsPackResult,
    NotifyResult,
    ToolConfig,
)

# Exceptions
from .api.exceptions import (
    CmpkgToolError,
    ValidationError,
    InvalidEnvironmentError,
    ConfigError,
    MissingCredentialsError,
    FolderNotFoundError,
    ManifestError,
    ManifestResolutionError,
    PackError,
    StorageError,
)

__all__ = [
    # Version information
    "__version__",
    "__version_info__",
    "__license__",

    # Main classes
    "Packer",
    "Deployer",

    # Core API functions
    "pack",
    "deploy",

    # Data models
    "Manifest",
    "ResolvedManifest",
    "DeployUnit",
    "DeployRun",
    "DeployOutcome",
    "OutcomeStatus",
    "PackResult",
    "ScriptsPackResult",
    "NotifyResult",
    "ToolConfig",

    # Exceptions
    "CmpkgToolError",
    "ValidationError",
    "InvalidEnvironmentError",
    "ConfigError",
    "MissingCredentialsError",
    "FolderNotFoundError",
    "ManifestError",
    "ManifestResolutionError",
    "PackError",
    "StorageError",
]
