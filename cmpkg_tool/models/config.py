"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..constants import (
    DEFAULT_BUCKET,
    DEFAULT_REGION,
    DEFAULT_NOTIFY_TIMEOUT,
    MARKETPLACE_URLS,
    TEST_MARKETPLACE_URL,
    TOKEN_LEGACY_SECRET,
    TOKEN_TTL_MINUTES,
)


@dataclass
class ToolConfig:
    """Tool configuration (.cmpkg-tool.yaml)"""

    bucket: str = DEFAULT_BUCKET
    default_region: str = DEFAULT_REGION
    marketplace_urls: Dict[str, str] = field(default_factory=lambda: dict(MARKETPLACE_URLS))
    test_marketplace_url: str = TEST_MARKETPLACE_URL
    jwt_secret: str = TOKEN_LEGACY_SECRET
    token_ttl_minutes: int = TOKEN_TTL_MINUTES
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT

    def __post_init__(self):
        """Validate configuration"""
        if not self.bucket:
            raise ValueError("Configuration requires 'bucket'")
        if self.token_ttl_minutes <= 0:
            raise ValueError("'token_ttl_minutes' must be positive")
        if self.notify_timeout <= 0:
            raise ValueError("'notify_timeout' must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "storage": {
                "bucket": self.bucket,
                "region": self.default_region,
            },
            "marketplace": {
                "urls": dict(self.marketplace_urls),
                "test_url": self.test_marketplace_url,
                "jwt_secret": self.jwt_secret,
                "token_ttl_minutes": self.token_ttl_minutes,
                "timeout": self.notify_timeout,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ToolConfig':
        """Create from dictionary, falling back to defaults for missing keys"""
        data = data or {}
        storage = data.get("storage") or {}
        marketplace = data.get("marketplace") or {}

        urls = dict(MARKETPLACE_URLS)
        urls.update({k.lower(): v for k, v in (marketplace.get("urls") or {}).items()})

        return cls(
            bucket=storage.get("bucket", DEFAULT_BUCKET),
            default_region=storage.get("region", DEFAULT_REGION),
            marketplace_urls=urls,
            test_marketplace_url=marketplace.get("test_url", TEST_MARKETPLACE_URL),
            jwt_secret=marketplace.get("jwt_secret", TOKEN_LEGACY_SECRET),
            token_ttl_minutes=int(marketplace.get("token_ttl_minutes", TOKEN_TTL_MINUTES)),
            notify_timeout=float(marketplace.get("timeout", DEFAULT_NOTIFY_TIMEOUT)),
        )
