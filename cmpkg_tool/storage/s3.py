# cmpkg_tool/storage/s3.py
"""AWS S3 storage backend"""

import asyncio
import base64
import json
import logging
from pathlib import Path
from typing import Dict

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import ObjectState, StorageBackend
from ..api.exceptions import StorageError
from ..constants import KEY_NAME, KEY_VERSION, S3_NOT_FOUND_CODES, S3_URL_TEMPLATE
from ..core.environment import Credentials
from ..models.deploy import DeployUnit

logger = logging.getLogger(__name__)


def build_metadata(unit: DeployUnit) -> Dict[str, str]:
    """
    Build the object metadata of a package archive

    ``info`` carries the base64 encoded JSON of the package name, version
    and descriptor payload.

    Args:
        unit: Deploy unit

    Returns:
        Metadata map
    """
    info = {
        KEY_NAME: unit.package_name,
        KEY_VERSION: unit.version,
        "manifesto": unit.payload(),
    }
    encoded = base64.b64encode(
        json.dumps(info, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    ).decode("ascii")

    metadata = {
        "info": encoded,
        KEY_NAME: unit.package_name,
        KEY_VERSION: unit.version,
    }
    if unit.company_code:
        metadata["empresa"] = unit.company_code
    return metadata


class S3Storage(StorageBackend):
    """AWS S3 storage implementation"""

    def __init__(self, bucket: str, credentials: Credentials):
        """
        Initialize S3 storage

        Args:
            bucket: S3 bucket name
            credentials: Access key, secret key and region
        """
        super().__init__(bucket)
        self._region = credentials.region
        self.client = boto3.client(
            "s3",
            aws_access_key_id=credentials.access_key,
            aws_secret_access_key=credentials.secret_key,
            region_name=credentials.region,
        )

    @property
    def region(self) -> str:
        """AWS region"""
        return self._region

    def url_for(self, key: str) -> str:
        return S3_URL_TEMPLATE.format(bucket=self.bucket, key=key)

    async def exists(self, key: str) -> ObjectState:
        """Check if an object exists in S3"""

        def _head():
            try:
                self.client.head_object(Bucket=self.bucket, Key=key)
                return ObjectState.FOUND
            except ClientError as e:
                code = str(e.response.get("Error", {}).get("Code", ""))
                if code in S3_NOT_FOUND_CODES:
                    return ObjectState.NOT_FOUND
                raise StorageError(f"Failed to check s3://{self.bucket}/{key}: {e}")
            except BotoCoreError as e:
                raise StorageError(f"Failed to check s3://{self.bucket}/{key}: {e}")

        # boto3 is synchronous, run in executor
        return await asyncio.get_event_loop().run_in_executor(None, _head)

    async def upload(self,
                     local_path: Path,
                     key: str,
                     metadata: Dict[str, str],
                     content_type: str) -> str:
        """Upload file to S3"""

        def _upload():
            try:
                with open(local_path, "rb") as f:
                    self.client.put_object(
                        Bucket=self.bucket,
                        Key=key,
                        Body=f,
                        ContentType=content_type,
                        Metadata=metadata,
                    )
            except (ClientError, BotoCoreError) as e:
                raise StorageError(f"Upload of {local_path.name} failed: {e}")

        logger.debug(f"Uploading {local_path} to s3://{self.bucket}/{key}")
        await asyncio.get_event_loop().run_in_executor(None, _upload)
        return self.url_for(key)
