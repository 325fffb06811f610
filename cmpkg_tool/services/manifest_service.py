"""Manifest file reading and writing"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import aiofiles
import jsonschema

from ..api.exceptions import ManifestFormatError, ManifestNotFoundError, ValidationError
from ..constants import (
    KEY_FILES,
    KEY_NAME,
    KEY_PATTERN,
    KEY_VERSION,
    MANIFEST_FILE,
    MANIFEST_SOURCE_FILES,
)
from ..models.manifest import Manifest, ResolvedManifest

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA = {
    "type": "object",
    "required": [KEY_NAME, KEY_VERSION],
    "properties": {
        KEY_NAME: {"type": "string", "minLength": 1},
        KEY_VERSION: {"type": "string", "minLength": 1},
        KEY_FILES: {
            "type": ["array", "null"],
            "items": {
                "type": "object",
                "anyOf": [
                    {"required": [KEY_NAME], "properties": {KEY_NAME: {"type": "string", "minLength": 1}}},
                    {"required": [KEY_PATTERN], "properties": {KEY_PATTERN: {"type": "string", "minLength": 1}}},
                ],
            },
        },
    },
}

DEPLOY_PAYLOAD_SCHEMA = {
    "type": "object",
    "required": [KEY_NAME, KEY_VERSION],
    "properties": {
        KEY_NAME: {"type": "string", "minLength": 1},
        KEY_VERSION: {"type": "string", "minLength": 1},
    },
}


def drop_nulls(data: Any) -> Any:
    """Remove null-valued keys from nested objects"""
    if isinstance(data, dict):
        return {k: drop_nulls(v) for k, v in data.items() if v is not None}
    if isinstance(data, list):
        return [drop_nulls(item) for item in data]
    return data


def _validate(data: Any, schema: Dict[str, Any], source: Path) -> None:
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path)
        where = f" at '{location}'" if location else ""
        raise ManifestFormatError(f"Invalid manifest {source.name}{where}: {e.message}")


def _parse_json(content: str, source: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestFormatError(f"Invalid JSON in {source.name}: {e}")


class ManifestService:
    """Reads manifest sources and writes manifesto.dat"""

    def find_source(self, folder: Path) -> Path:
        """
        Find the manifest source of a package folder

        manifesto.server is preferred over manifesto.local.

        Raises:
            ManifestNotFoundError: If neither file exists
        """
        folder = Path(folder)
        for file_name in MANIFEST_SOURCE_FILES:
            candidate = folder / file_name
            if candidate.is_file():
                return candidate
        raise ManifestNotFoundError(folder, MANIFEST_SOURCE_FILES)

    def load_manifest(self, folder: Path) -> Manifest:
        """
        Load and validate the manifest of a package folder

        Args:
            folder: Package folder

        Returns:
            Parsed manifest

        Raises:
            ManifestNotFoundError: If the folder has no manifest source
            ManifestFormatError: If the manifest is not valid
        """
        source = self.find_source(folder)
        logger.debug(f"Reading manifest {source}")

        try:
            with open(source, 'r', encoding='utf-8-sig') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise ManifestFormatError(f"Invalid encoding in {source.name}, expected UTF-8: {e}")

        data = _parse_json(content, source)

        _validate(data, MANIFEST_SCHEMA, source)

        try:
            return Manifest.from_dict(data)
        except ValidationError as e:
            raise ManifestFormatError(f"Invalid manifest {source.name}: {e}")

    def save_manifest(self, manifest: ResolvedManifest, folder: Path) -> Path:
        """
        Write manifesto.dat into a package folder

        Args:
            manifest: Resolved manifest
            folder: Package folder

        Returns:
            Path of the written file
        """
        manifest_path = Path(folder) / MANIFEST_FILE
        data = drop_nulls(manifest.to_dict())

        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.debug(f"Wrote {manifest_path}")
        return manifest_path

    async def read_deploy_payload(self, folder: Path) -> Dict[str, Any]:
        """
        Read manifesto.dat from a folder as a marketplace payload

        Raises:
            ManifestNotFoundError: If manifesto.dat is missing
            ManifestFormatError: If it is not a valid manifest
        """
        folder = Path(folder)
        manifest_path = folder / MANIFEST_FILE
        if not manifest_path.is_file():
            raise ManifestNotFoundError(folder, [MANIFEST_FILE])

        try:
            async with aiofiles.open(manifest_path, 'r', encoding='utf-8-sig') as f:
                content = await f.read()
        except UnicodeDecodeError as e:
            raise ManifestFormatError(f"Invalid encoding in {manifest_path.name}, expected UTF-8: {e}")

        data = _parse_json(content, manifest_path)
        _validate(data, DEPLOY_PAYLOAD_SCHEMA, manifest_path)
        return data
