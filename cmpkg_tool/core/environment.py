"""Deploy environment and pre-flight resolution"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..api.exceptions import InvalidEnvironmentError, MissingCredentialsError
from ..constants import (
    DEFAULT_REGION,
    ENV_AWS_ACCESS_KEY,
    ENV_AWS_REGION,
    ENV_AWS_SECRET_KEY,
    ENV_STAGE_OVERRIDE,
    ENV_TEST_MODE,
    VALID_ENVIRONMENTS,
)
from ..models.config import ToolConfig


@dataclass(frozen=True)
class Credentials:
    """Resolved storage credentials"""
    access_key: str
    secret_key: str
    region: str

    def __repr__(self) -> str:
        return f"Credentials(access_key='{self.access_key}', secret_key='***', region='{self.region}')"


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return (environ.get(name) or "").strip().lower() == "true"


def validate_environment(environment: str) -> str:
    """
    Validate a deploy environment name

    Args:
        environment: Environment name, any casing

    Returns:
        Lower-cased environment name

    Raises:
        InvalidEnvironmentError: If the name is not accepted
    """
    normalized = (environment or "").strip().lower()
    if normalized not in VALID_ENVIRONMENTS:
        raise InvalidEnvironmentError(environment, VALID_ENVIRONMENTS)
    return normalized


def resolve_credentials(access_key: Optional[str] = None,
                        secret_key: Optional[str] = None,
                        region: Optional[str] = None,
                        environ: Optional[Mapping[str, str]] = None,
                        default_region: str = DEFAULT_REGION) -> Credentials:
    """
    Resolve storage credentials

    Explicit values win over environment variables. The region falls back
    to the default region when neither is set.

    Raises:
        MissingCredentialsError: If the access key or secret key is missing
    """
    environ = os.environ if environ is None else environ

    access_key = access_key or environ.get(ENV_AWS_ACCESS_KEY)
    if not access_key:
        raise MissingCredentialsError("Access key", "--access-key", ENV_AWS_ACCESS_KEY)

    secret_key = secret_key or environ.get(ENV_AWS_SECRET_KEY)
    if not secret_key:
        raise MissingCredentialsError("Secret key", "--secret-key", ENV_AWS_SECRET_KEY)

    region = region or environ.get(ENV_AWS_REGION) or default_region

    return Credentials(access_key=access_key, secret_key=secret_key, region=region)


def resolve_marketplace_url(environment: str,
                            explicit_url: Optional[str] = None,
                            config: Optional[ToolConfig] = None,
                            environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve the marketplace base URL

    Order: explicit URL, test mode (TEST=true), configured URL for the
    environment.

    Args:
        environment: Validated environment name
        explicit_url: URL given on the command line
        config: Tool configuration
        environ: Environment variables (defaults to os.environ)

    Returns:
        Marketplace base URL
    """
    if explicit_url:
        return explicit_url

    environ = os.environ if environ is None else environ
    config = config or ToolConfig()

    if _flag(environ, ENV_TEST_MODE):
        return config.test_marketplace_url

    return config.marketplace_urls[environment.lower()]


def is_stage_override_active(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check if STAGE=true forces stage routing"""
    environ = os.environ if environ is None else environ
    return _flag(environ, ENV_STAGE_OVERRIDE)
