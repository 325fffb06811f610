"""Storage backend factory"""

from .base import StorageBackend
from .s3 import S3Storage
from ..core.environment import Credentials


class StorageFactory:
    """Factory for creating storage backend instances"""

    @classmethod
    def create(cls, bucket: str, credentials: Credentials) -> StorageBackend:
        """Create the storage backend used for a deploy run

        Args:
            bucket: Bucket name
            credentials: Resolved credentials

        Returns:
            Storage backend instance

        Raises:
            ValueError: If bucket is empty
        """
        if not bucket:
            raise ValueError("Bucket name is required")
        return S3Storage(bucket, credentials)
