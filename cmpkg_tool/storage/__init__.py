# cmpkg_tool/storage/__init__.py
"""Storage backends for cmpkg-tool"""

from .base import ObjectState, StorageBackend
from .s3 import S3Storage, build_metadata
from .factory import StorageFactory

__all__ = [
    'ObjectState',
    'StorageBackend',
    'S3Storage',
    'StorageFactory',
    'build_metadata',
]
