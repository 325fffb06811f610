# cmpkg_tool/models/manifest.py
"""Manifest models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..api.exceptions import ValidationError
from ..constants import (
    KEY_NAME,
    KEY_VERSION,
    KEY_FILES,
    KEY_PATTERN,
    KEY_DESTINATION,
    MANIFEST_FILE,
)

JsonValue = Union[str, bool, int, float, None, List[Any], Dict[str, Any]]
Extras = Dict[str, JsonValue]


def validate_extras(extras: Optional[Dict[str, Any]], context: str = "manifest") -> Extras:
    """Check that an extras map only carries JSON values

    Key order is preserved so serialization stays deterministic.

    Args:
        extras: Free-form key/value map
        context: Where the map comes from (used in error messages)

    Returns:
        A new dict with the same keys and values

    Raises:
        ValidationError: If a key is not a string or a value is not JSON
    """
    if extras is None:
        return {}

    result: Extras = {}
    for key, value in extras.items():
        if not isinstance(key, str):
            raise ValidationError(f"Invalid key {key!r} in {context}: keys must be strings")
        _check_json_value(value, f"{context}.{key}")
        result[key] = value
    return result


def _check_json_value(value: Any, path: str) -> None:
    if value is None or isinstance(value, (str, bool, int, float)):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check_json_value(item, f"{path}[{index}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValidationError(f"Invalid key {key!r} at {path}: keys must be strings")
            _check_json_value(item, f"{path}.{key}")
        return
    raise ValidationError(f"Unsupported value of type {type(value).__name__} at {path}")


@dataclass(frozen=True)
class ExplicitName:
    """Entry that names one exact file"""
    name: str


@dataclass(frozen=True)
class NamePattern:
    """Entry that selects files with a regular expression"""
    pattern: str


EntrySpec = Union[ExplicitName, NamePattern]


@dataclass
class ManifestEntry:
    """Declarative file entry as written in manifesto.server / manifesto.local"""
    spec: EntrySpec
    destination: Optional[str] = None
    extras: Extras = field(default_factory=dict)

    @property
    def is_pattern(self) -> bool:
        """Check if the entry selects files by pattern"""
        return isinstance(self.spec, NamePattern)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        if isinstance(self.spec, ExplicitName):
            data: Dict[str, Any] = {KEY_NAME: self.spec.name}
        else:
            data = {KEY_PATTERN: self.spec.pattern}

        if self.destination is not None:
            data[KEY_DESTINATION] = self.destination
        data.update(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ManifestEntry':
        """Create from dictionary

        An explicit name wins when both name and pattern are present.
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Manifest file entry must be an object, got: {data!r}")

        name = data.get(KEY_NAME)
        pattern = data.get(KEY_PATTERN)

        if name:
            spec: EntrySpec = ExplicitName(name)
        elif pattern:
            spec = NamePattern(pattern)
        else:
            raise ValidationError(
                f"Manifest file entry needs '{KEY_NAME}' or '{KEY_PATTERN}': {data!r}"
            )

        extras = {
            k: v for k, v in data.items()
            if k not in (KEY_NAME, KEY_PATTERN, KEY_DESTINATION)
        }

        return cls(
            spec=spec,
            destination=data.get(KEY_DESTINATION),
            extras=validate_extras(extras, "file entry")
        )


@dataclass
class ResolvedEntry:
    """File entry bound to a concrete file name"""
    name: str
    destination: Optional[str] = None
    extras: Extras = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (null destination omitted)"""
        data: Dict[str, Any] = {KEY_NAME: self.name}
        if self.destination is not None:
            data[KEY_DESTINATION] = self.destination
        data.update(self.extras)
        return data


@dataclass
class Manifest:
    """Package manifest before resolution"""
    name: str
    version: str
    entries: List[ManifestEntry] = field(default_factory=list)
    extras: Extras = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            KEY_NAME: self.name,
            KEY_VERSION: self.version,
            KEY_FILES: [e.to_dict() for e in self.entries],
        }
        data.update(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Manifest':
        """Create from dictionary"""
        extras = {
            k: v for k, v in data.items()
            if k not in (KEY_NAME, KEY_VERSION, KEY_FILES)
        }
        return cls(
            name=data[KEY_NAME],
            version=data[KEY_VERSION],
            entries=[ManifestEntry.from_dict(e) for e in data.get(KEY_FILES) or []],
            extras=validate_extras(extras)
        )


@dataclass
class ResolvedManifest:
    """Package manifest after resolution, written out as manifesto.dat"""
    name: str
    version: str
    entries: List[ResolvedEntry] = field(default_factory=list)
    extras: Extras = field(default_factory=dict)

    @property
    def file_names(self) -> List[str]:
        """Get entry names in packaging order"""
        return [e.name for e in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            KEY_NAME: self.name,
            KEY_VERSION: self.version,
            KEY_FILES: [e.to_dict() for e in self.entries],
        }
        data.update(self.extras)
        return data


@dataclass
class Resolution:
    """Outcome of resolving a manifest against a folder listing"""
    manifest: ResolvedManifest
    files: List[str]

    def __post_init__(self):
        if not self.files or self.files[0] != MANIFEST_FILE:
            raise ValueError(f"Resolved file list must start with {MANIFEST_FILE}")
