"""Operation result models"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .deploy import DeployUnit


class OutcomeStatus(Enum):
    """Per-unit deploy outcome"""
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class DeployOutcome:
    """Result of processing one deploy unit"""
    unit: DeployUnit
    status: OutcomeStatus
    reason: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'unit': self.unit.to_dict(),
            'status': self.status.value,
        }
        if self.reason:
            data['reason'] = self.reason
        if self.url:
            data['url'] = self.url
        return data


@dataclass
class DiscoveryResult:
    """Units found in a deploy folder plus non-fatal problems"""
    units: List[DeployUnit] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class DeployRun:
    """Aggregate of one deploy run"""
    environment: str
    marketplace_url: str
    simulated: bool = False
    sent: List[DeployOutcome] = field(default_factory=list)
    skipped: List[DeployOutcome] = field(default_factory=list)
    failed: List[DeployOutcome] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration: float = 0.0
    cancelled: bool = False

    @property
    def total(self) -> int:
        """Get number of processed units"""
        return len(self.sent) + len(self.skipped) + len(self.failed)

    @property
    def has_failures(self) -> bool:
        """Check if any unit failed"""
        return bool(self.failed)

    def record(self, outcome: DeployOutcome) -> None:
        """Append an outcome to its bucket"""
        if outcome.status is OutcomeStatus.SENT:
            self.sent.append(outcome)
        elif outcome.status is OutcomeStatus.SKIPPED:
            self.skipped.append(outcome)
        else:
            self.failed.append(outcome)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'environment': self.environment,
            'marketplace_url': self.marketplace_url,
            'simulated': self.simulated,
            'sent': [o.to_dict() for o in self.sent],
            'skipped': [o.to_dict() for o in self.skipped],
            'failed': [o.to_dict() for o in self.failed],
            'warnings': self.warnings,
            'errors': self.errors,
            'duration': self.duration,
            'cancelled': self.cancelled,
        }


@dataclass
class PackResult:
    """Result of packaging one folder"""
    archive_path: Path
    manifest_path: Path
    files: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'archive_path': str(self.archive_path),
            'manifest_path': str(self.manifest_path),
            'files': self.files,
            'warnings': self.warnings,
            'duration': self.duration,
        }


@dataclass
class ScriptsPackResult:
    """Result of packaging database scripts"""
    generated: List[Path] = field(default_factory=list)
    renamed: List[Tuple[Path, Path]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    duration: float = 0.0


@dataclass(frozen=True)
class NotifyResult:
    """Marketplace notification outcome"""
    success: bool
    status: Optional[int] = None
    reason: Optional[str] = None

    def __str__(self) -> str:
        if self.success:
            return f"HTTP {self.status}"
        if self.status:
            return f"HTTP {self.status}: {self.reason}"
        return self.reason or "unknown error"
