# cmpkg_tool/models/deploy.py
"""Deploy unit model"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class DeployUnit:
    """One discovered (manifest descriptor, archive) pair ready for upload"""
    package_name: str
    version: str
    archive_path: Path
    manifest_path: Path
    is_development_build: bool = False
    company_code: Optional[str] = None
    raw_payload: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Read-only view so the payload cannot change after discovery
        object.__setattr__(self, 'raw_payload', MappingProxyType(dict(self.raw_payload)))

    @property
    def archive_name(self) -> str:
        """Archive file name, also the last segment of the storage key"""
        return self.archive_path.name

    def payload(self) -> Dict[str, Any]:
        """Get a mutable copy of the descriptor payload"""
        return dict(self.raw_payload)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'package_name': self.package_name,
            'version': self.version,
            'is_development_build': self.is_development_build,
            'archive_path': str(self.archive_path),
            'manifest_path': str(self.manifest_path),
        }
        if self.company_code:
            data['company_code'] = self.company_code
        return data
