"""Storage routing rules"""

from ..constants import (
    ENV_PRODUCTION,
    ENV_STAGE,
    PREFIX_DEVELOPMENT,
    PREFIX_PRODUCTION,
    PREFIX_STAGE,
)


def storage_prefix(environment: str, is_development_build: bool, stage_override: bool) -> str:
    """
    Pick the storage prefix for a package

    Development builds always go to the development prefix, even in a
    production run.

    Args:
        environment: Validated environment name
        is_development_build: Package was built with the develop flag
        stage_override: Stage routing forced from the environment

    Returns:
        One of packages, packages-dev, packages-stage
    """
    if is_development_build:
        return PREFIX_DEVELOPMENT

    environment = (environment or "").lower()

    if stage_override or environment == ENV_STAGE:
        return PREFIX_STAGE

    if environment == ENV_PRODUCTION:
        return PREFIX_PRODUCTION

    return PREFIX_DEVELOPMENT


def storage_key(prefix: str, archive_name: str) -> str:
    """Get the object key of an archive under a prefix"""
    return f"{prefix}/{archive_name}"
