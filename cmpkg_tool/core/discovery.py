"""Deploy unit discovery"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Set

import aiofiles

from ..api.exceptions import FolderNotFoundError
from ..constants import (
    ARCHIVE_GLOB,
    DESCRIPTOR_GLOB,
    KEY_COMPANY,
    KEY_DEVELOP,
    KEY_NAME,
    KEY_VERSION,
)
from ..models.deploy import DeployUnit
from ..models.result import DiscoveryResult
from .naming import build_archive_name

logger = logging.getLogger(__name__)


class DescriptorError(Exception):
    """A descriptor file cannot produce a deploy unit"""
    pass


class _Descriptor(NamedTuple):
    descriptor: Path
    payload: Dict[str, Any]
    name: str
    version: str
    develop: bool
    company_code: Optional[str]
    archive_name: str


class DeployUnitDiscoverer:
    """Finds (descriptor, archive) pairs in a deploy folder"""

    async def discover(self, folder: Path) -> DiscoveryResult:
        """
        Discover deploy units in a folder

        Descriptor problems are recorded on the result and never abort the
        scan. A descriptor whose archive is missing adopts an archive no
        other descriptor expects, or is dropped with a warning.

        Args:
            folder: Deploy folder

        Returns:
            Discovery result

        Raises:
            FolderNotFoundError: If the folder does not exist
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise FolderNotFoundError(folder)

        result = DiscoveryResult()

        descriptors = sorted(p for p in folder.glob(DESCRIPTOR_GLOB) if p.is_file())
        if not descriptors:
            logger.info(f"No descriptors found in {folder}")
            return result

        parsed = []
        for descriptor in descriptors:
            try:
                payload = await self._read_descriptor(descriptor)
                parsed.append(self._parse_descriptor(descriptor, payload))
            except DescriptorError as e:
                logger.error(f"{descriptor.name}: {e}")
                result.errors.append(f"{descriptor.name}: {e}")

        # Archives expected by some descriptor are never adopted by another
        claimed = {entry.archive_name.lower() for entry in parsed}

        for entry in parsed:
            archive_path = folder / entry.archive_name
            if not archive_path.is_file():
                archive_path = self._adopt_archive(folder, archive_path, claimed)
                if archive_path is None:
                    message = f"{entry.descriptor.name}: archive not found ({entry.archive_name})"
                    logger.warning(message)
                    result.warnings.append(message)
                    continue

            unit = DeployUnit(
                package_name=entry.name,
                version=entry.version,
                archive_path=archive_path,
                manifest_path=entry.descriptor,
                is_development_build=entry.develop,
                company_code=entry.company_code or None,
                raw_payload=entry.payload
            )
            logger.debug(f"Discovered {unit.package_name} {unit.version} -> {unit.archive_name}")
            result.units.append(unit)

        return result

    async def _read_descriptor(self, descriptor: Path) -> Dict[str, Any]:
        try:
            async with aiofiles.open(descriptor, 'r', encoding='utf-8') as f:
                content = await f.read()
        except (UnicodeDecodeError, OSError) as e:
            raise DescriptorError(f"cannot read descriptor ({e})")

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise DescriptorError(f"invalid JSON ({e})")

        if not isinstance(payload, dict):
            raise DescriptorError("descriptor must be a JSON object")

        return payload

    @staticmethod
    def _parse_descriptor(descriptor: Path, payload: Dict[str, Any]) -> _Descriptor:
        name = payload.get(KEY_NAME)
        version = payload.get(KEY_VERSION)

        if not isinstance(name, str) or not name.strip():
            raise DescriptorError(f"missing '{KEY_NAME}'")
        if not isinstance(version, str) or not version.strip():
            raise DescriptorError(f"missing '{KEY_VERSION}'")

        develop = payload.get(KEY_DEVELOP, False)
        if develop is None:
            develop = False
        if not isinstance(develop, bool):
            raise DescriptorError(f"'{KEY_DEVELOP}' must be true or false")

        company_code = payload.get(KEY_COMPANY)
        if company_code is not None and not isinstance(company_code, str):
            raise DescriptorError(f"'{KEY_COMPANY}' must be a string")

        try:
            archive_name = build_archive_name(company_code, version, name)
        except ValueError as e:
            raise DescriptorError(str(e))

        return _Descriptor(descriptor, payload, name, version, develop, company_code, archive_name)

    @staticmethod
    def _adopt_archive(folder: Path, expected: Path, claimed: Set[str]) -> Optional[Path]:
        """Rename the first unclaimed archive in the folder to the expected name"""
        candidates = sorted(
            p for p in folder.glob(ARCHIVE_GLOB)
            if p.is_file() and p.name.lower() not in claimed
        )
        if not candidates:
            return None

        source = candidates[0]
        logger.info(f"Renaming {source.name} to {expected.name}")
        return source.replace(expected)
