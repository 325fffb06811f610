"""Manifest resolution against a folder listing"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..api.exceptions import (
    FolderNotFoundError,
    InvalidPatternError,
    ManifestEntryNotFoundError,
    PatternNoMatchError,
)
from ..constants import (
    DEFAULT_DESTINATION_WEIGHT,
    DESTINATION_WEIGHTS,
    DEST_CLIENT,
    DEST_SCRIPTS,
    EXECUTABLE_SUFFIX,
    MANIFEST_FILE,
    RESERVED_MANIFEST_FILES,
    SCRIPTS_ARCHIVE_PATTERN,
)
from ..models.manifest import (
    ExplicitName,
    Manifest,
    NamePattern,
    Resolution,
    ResolvedEntry,
    ResolvedManifest,
)

logger = logging.getLogger(__name__)


def classify(file_name: str) -> Optional[str]:
    """
    Guess the destination of a file the manifest does not mention

    Args:
        file_name: File name

    Returns:
        Destination name, or None for generic files
    """
    if SCRIPTS_ARCHIVE_PATTERN.search(file_name):
        return DEST_SCRIPTS
    if file_name.lower().endswith(EXECUTABLE_SUFFIX):
        return DEST_CLIENT
    return None


def destination_weight(destination: Optional[str]) -> int:
    """Get the packaging order weight of a destination"""
    if not destination:
        return DEFAULT_DESTINATION_WEIGHT
    return DESTINATION_WEIGHTS.get(destination.lower(), DEFAULT_DESTINATION_WEIGHT)


class ManifestResolver:
    """Binds manifest entries to the files of a folder"""

    def resolve(self, manifest: Manifest, directory_files: Iterable[str]) -> Resolution:
        """
        Resolve a manifest against a folder listing

        Resolution is all-or-nothing: the first entry that cannot be bound
        raises before any result is produced.

        Args:
            manifest: Manifest read from manifesto.server / manifesto.local
            directory_files: File names present in the folder

        Returns:
            Resolved manifest and ordered file list, manifesto.dat first

        Raises:
            ManifestEntryNotFoundError: If a named file is missing
            PatternNoMatchError: If a pattern matches no file
            InvalidPatternError: If a pattern is not a valid regex
        """
        listing = list(directory_files)

        # lower-cased name -> name as found in the folder
        available: Dict[str, str] = {}
        for file_name in listing:
            available.setdefault(file_name.lower(), file_name)

        claimed = set()
        resolved: List[ResolvedEntry] = []

        # Explicit names first
        for entry in manifest.entries:
            if not isinstance(entry.spec, ExplicitName):
                continue

            key = entry.spec.name.lower()
            if key not in available:
                raise ManifestEntryNotFoundError(entry.spec.name)

            claimed.add(key)
            resolved.append(ResolvedEntry(
                name=available[key],
                destination=entry.destination,
                extras=dict(entry.extras)
            ))

        # Then patterns, against whatever is still unclaimed
        for entry in manifest.entries:
            if not isinstance(entry.spec, NamePattern):
                continue

            try:
                regex = re.compile(entry.spec.pattern, re.IGNORECASE)
            except re.error as e:
                raise InvalidPatternError(entry.spec.pattern, str(e))

            matches = [
                name for key, name in available.items()
                if key not in claimed and regex.search(name)
            ]
            if not matches:
                raise PatternNoMatchError(entry.spec.pattern)

            for name in matches:
                claimed.add(name.lower())
                resolved.append(ResolvedEntry(
                    name=name,
                    destination=entry.destination,
                    extras=dict(entry.extras)
                ))
            logger.debug(f"Pattern '{entry.spec.pattern}' matched {len(matches)} file(s)")

        for key, name in available.items():
            if key in claimed or key in RESERVED_MANIFEST_FILES:
                continue
            logger.debug(f"Adding unlisted file: {name}")
            resolved.append(ResolvedEntry(name=name, destination=classify(name)))

        resolved = self._deduplicate(resolved)
        resolved.sort(key=lambda e: destination_weight(e.destination))

        resolved = [e for e in resolved if e.name.lower() != MANIFEST_FILE]
        resolved.insert(0, ResolvedEntry(name=MANIFEST_FILE))

        resolved_manifest = ResolvedManifest(
            name=manifest.name,
            version=manifest.version,
            entries=resolved,
            extras=dict(manifest.extras)
        )
        return Resolution(manifest=resolved_manifest, files=resolved_manifest.file_names)

    def resolve_folder(self, manifest: Manifest, folder: Path) -> Resolution:
        """
        Resolve a manifest against the files of a folder

        Raises:
            FolderNotFoundError: If the folder does not exist
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise FolderNotFoundError(folder)

        listing = sorted(p.name for p in folder.iterdir() if p.is_file())
        return self.resolve(manifest, listing)

    @staticmethod
    def _deduplicate(entries: List[ResolvedEntry]) -> List[ResolvedEntry]:
        seen = set()
        result = []
        for entry in entries:
            key = entry.name.lower()
            if key in seen:
                continue
            seen.add(key)
            result.append(entry)
        return result
