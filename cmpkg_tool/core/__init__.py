"""Core functionality for cmpkg-tool"""

from .naming import archive_prefix, build_archive_name
from .routing import storage_key, storage_prefix
from .environment import (
    Credentials,
    validate_environment,
    resolve_credentials,
    resolve_marketplace_url,
    is_stage_override_active,
)
from .manifest_resolver import ManifestResolver, classify, destination_weight
from .discovery import DeployUnitDiscoverer

__all__ = [
    "archive_prefix",
    "build_archive_name",
    "storage_key",
    "storage_prefix",
    "Credentials",
    "validate_environment",
    "resolve_credentials",
    "resolve_marketplace_url",
    "is_stage_override_active",
    "ManifestResolver",
    "classify",
    "destination_weight",
    "DeployUnitDiscoverer",
]
