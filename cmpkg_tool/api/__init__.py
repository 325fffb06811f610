# cmpkg_tool/api/__init__.py
"""API layer for cmpkg-tool"""

from .exceptions import (
    CmpkgToolError,
    ValidationError,
    InvalidEnvironmentError,
    ConfigError,
    MissingCredentialsError,
    PathError,
    FolderNotFoundError,
    ManifestError,
    ManifestNotFoundError,
    ManifestFormatError,
    ManifestResolutionError,
    ManifestEntryNotFoundError,
    PatternNoMatchError,
    InvalidPatternError,
    PackError,
    StorageError,
)
from .packer import Packer, pack
from .deployer import Deployer, deploy

__all__ = [
    # Main classes
    "Packer",
    "Deployer",

    # Convenience functions
    "pack",
    "deploy",

    # Exceptions
    "CmpkgToolError",
    "ValidationError",
    "InvalidEnvironmentError",
    "ConfigError",
    "MissingCredentialsError",
    "PathError",
    "FolderNotFoundError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestFormatError",
    "ManifestResolutionError",
    "ManifestEntryNotFoundError",
    "PatternNoMatchError",
    "InvalidPatternError",
    "PackError",
    "StorageError",
]
