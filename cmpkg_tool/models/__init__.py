# cmpkg_tool/models/__init__.py
"""Data models for cmpkg-tool"""

from .manifest import (
    ExplicitName,
    NamePattern,
    ManifestEntry,
    ResolvedEntry,
    Manifest,
    ResolvedManifest,
    Resolution,
    validate_extras,
)
from .deploy import DeployUnit
from .result import (
    OutcomeStatus,
    DeployOutcome,
    DiscoveryResult,
    DeployRun,
    PackResult,
    ScriptsPackResult,
    NotifyResult,
)
from .config import ToolConfig

__all__ = [
    # Manifest models
    "ExplicitName",
    "NamePattern",
    "ManifestEntry",
    "ResolvedEntry",
    "Manifest",
    "ResolvedManifest",
    "Resolution",
    "validate_extras",

    # Deploy models
    "DeployUnit",

    # Result models
    "OutcomeStatus",
    "DeployOutcome",
    "DiscoveryResult",
    "DeployRun",
    "PackResult",
    "ScriptsPackResult",
    "NotifyResult",

    # Config models
    "ToolConfig",
]
