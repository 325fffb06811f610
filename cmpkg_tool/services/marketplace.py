"""Marketplace notification service"""

import asyncio
import base64
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional

import aiohttp
import jwt

from ..constants import (
    DEFAULT_NOTIFY_TIMEOUT,
    KEY_NAME,
    KEY_VERSION,
    MARKETPLACE_NOTIFY_PATH,
    TOKEN_ID,
    TOKEN_LEGACY_SECRET,
    TOKEN_MIN_KEY_SIZE,
    TOKEN_TTL_MINUTES,
)
from ..models.deploy import DeployUnit
from ..models.result import NotifyResult

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenSigner:
    """Signs the bearer token expected by the marketplace"""

    def __init__(self,
                 secret: str = TOKEN_LEGACY_SECRET,
                 ttl_minutes: int = TOKEN_TTL_MINUTES,
                 clock: Callable[[], datetime] = _utcnow):
        """
        Args:
            secret: Shared secret
            ttl_minutes: Token lifetime
            clock: Returns the current UTC time
        """
        self.ttl_minutes = ttl_minutes
        self._clock = clock
        self._key = self.derive_key(secret)

    @staticmethod
    def derive_key(secret: str) -> bytes:
        """Get the HMAC key for a secret

        The key is the base64 text of the secret, zero padded to
        TOKEN_MIN_KEY_SIZE bytes.
        """
        key = base64.b64encode(secret.encode("utf-8"))
        if len(key) < TOKEN_MIN_KEY_SIZE:
            key = key.ljust(TOKEN_MIN_KEY_SIZE, b"\x00")
        return key

    def sign(self) -> str:
        """Create a fresh HS256 token"""
        claims = {
            "jti": TOKEN_ID,
            "exp": self._clock() + timedelta(minutes=self.ttl_minutes),
        }
        return jwt.encode(claims, self._key, algorithm="HS256")


class MarketplaceClient:
    """Tells the marketplace that a package version is available"""

    def __init__(self,
                 token_signer: Optional[TokenSigner] = None,
                 timeout: float = DEFAULT_NOTIFY_TIMEOUT,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Args:
            token_signer: Token signer, legacy secret by default
            timeout: Request timeout in seconds
            session: Shared session; a new one is opened per call otherwise
        """
        self.token_signer = token_signer or TokenSigner()
        self.timeout = timeout
        self._session = session

    @staticmethod
    def notify_url(base_url: str) -> str:
        """Get the notify endpoint for a marketplace base URL"""
        return base_url.rstrip("/") + MARKETPLACE_NOTIFY_PATH

    async def notify(self,
                     base_url: str,
                     name: str,
                     version: str,
                     manifest: Mapping[str, Any]) -> NotifyResult:
        """
        Notify the marketplace of a new package version

        Transport errors are reported in the result, never raised.

        Args:
            base_url: Marketplace base URL
            name: Package name
            version: Package version
            manifest: Descriptor payload forwarded verbatim

        Returns:
            Notify result
        """
        url = self.notify_url(base_url)
        body = json.dumps({
            KEY_NAME: name,
            KEY_VERSION: version,
            "manifesto": dict(manifest),
        }, ensure_ascii=False)
        headers = {
            "Authorization": f"Bearer {self.token_signer.sign()}",
            "Content-Type": "application/json; charset=utf-8",
        }

        logger.debug(f"POST {url} ({name} {version})")

        try:
            if self._session is not None:
                return await self._post(self._session, url, body, headers)

            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                return await self._post(session, url, body, headers)

        except asyncio.TimeoutError:
            logger.warning(f"Marketplace notify timed out: {url}")
            return NotifyResult(success=False, reason=f"timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            logger.warning(f"Marketplace notify failed: {e}")
            return NotifyResult(success=False, reason=str(e) or type(e).__name__)

    async def notify_unit(self, base_url: str, unit: DeployUnit) -> NotifyResult:
        """Notify the marketplace of an uploaded deploy unit"""
        return await self.notify(base_url, unit.package_name, unit.version, unit.raw_payload)

    @staticmethod
    async def _post(session: aiohttp.ClientSession, url: str, body: str, headers) -> NotifyResult:
        async with session.post(url, data=body.encode("utf-8"), headers=headers) as resp:
            if 200 <= resp.status < 300:
                return NotifyResult(success=True, status=resp.status)

            text = await resp.text()
            return NotifyResult(
                success=False,
                status=resp.status,
                reason=text.strip() or resp.reason
            )
