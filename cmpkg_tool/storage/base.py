# cmpkg_tool/storage/base.py
"""Storage backend abstract base class"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Dict


class ObjectState(Enum):
    """Outcome of an existence check"""
    FOUND = "found"
    NOT_FOUND = "not_found"


class StorageBackend(ABC):
    """Abstract base class for package storage backends

    Backends are configured once at construction and expose no way to
    change their bucket or credentials afterwards.
    """

    def __init__(self, bucket: str):
        self._bucket = bucket

    @property
    def bucket(self) -> str:
        """Bucket name"""
        return self._bucket

    @abstractmethod
    async def exists(self, key: str) -> ObjectState:
        """
        Check if an object exists

        Args:
            key: Object key

        Returns:
            FOUND or NOT_FOUND

        Raises:
            StorageError: If the check fails for any other reason
        """
        pass

    @abstractmethod
    async def upload(self,
                     local_path: Path,
                     key: str,
                     metadata: Dict[str, str],
                     content_type: str) -> str:
        """
        Upload a file

        Args:
            local_path: Local file path
            key: Object key
            metadata: Object metadata
            content_type: Content type of the object

        Returns:
            URL of the uploaded object
        """
        pass

    @abstractmethod
    def url_for(self, key: str) -> str:
        """Get the public URL of an object key"""
        pass
