"""Database scripts packaging"""

import json
import logging
import time
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import FolderNotFoundError, ManifestFormatError, PackError
from ..constants import (
    SCRIPTS_CONFIG_FILE,
    SCRIPTS_FILE_GLOBS,
    SCRIPTS_FOLDER_PATTERN,
    SCRIPTS_STANDARD_NAME_PATTERN,
)
from ..models.result import ScriptsPackResult
from ..utils.file_utils import create_zip, ensure_directory, relative_name

logger = logging.getLogger(__name__)


class ScriptsService:
    """Packs SQL and migration scripts into _scripts*.zip archives"""

    def pack(self,
             folder: Path,
             output: Optional[Path] = None,
             standardize_names: bool = False) -> ScriptsPackResult:
        """
        Package database scripts

        A folder holding config.json becomes ``_scripts.zip``. Otherwise each
        subfolder named like ``01`` or ``02extra`` that holds config.json
        becomes ``_scripts<subfolder>.zip``.

        Args:
            folder: Scripts folder
            output: Output folder (defaults to folder)
            standardize_names: Rename ``_scriptsNN*.zip`` to ``scriptsNN*.zip``

        Returns:
            Scripts pack result

        Raises:
            FolderNotFoundError: If folder does not exist
            ManifestFormatError: If a config.json is not valid JSON
            PackError: If writing an archive fails
        """
        started = time.monotonic()

        folder = Path(folder)
        if not folder.is_dir():
            raise FolderNotFoundError(folder)
        output = ensure_directory(Path(output) if output else folder)

        result = ScriptsPackResult()

        if self.has_config(folder):
            self._pack_folder(folder, output / "_scripts.zip", result)
        else:
            for subfolder in self.list_script_folders(folder):
                self._pack_folder(subfolder, output / f"_scripts{subfolder.name}.zip", result)

        if standardize_names:
            result.renamed = self._standardize_names(result.generated)

        result.duration = time.monotonic() - started
        return result

    @staticmethod
    def has_config(folder: Path) -> bool:
        """
        Check if a folder holds a valid config.json

        Raises:
            ManifestFormatError: If config.json exists but is not valid JSON
        """
        config_path = folder / SCRIPTS_CONFIG_FILE
        if not config_path.is_file():
            return False

        try:
            with open(config_path, 'r', encoding='utf-8-sig') as f:
                json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ManifestFormatError(f"Invalid {SCRIPTS_CONFIG_FILE} in {folder}: {e}")

        return True

    def list_script_folders(self, folder: Path) -> List[Path]:
        """List subfolders that hold a scripts set"""
        return [
            sub for sub in sorted(folder.iterdir())
            if sub.is_dir() and SCRIPTS_FOLDER_PATTERN.match(sub.name) and self.has_config(sub)
        ]

    @staticmethod
    def list_script_files(folder: Path) -> List[str]:
        """List script files of a folder as relative names, config.json last"""
        names = []
        for pattern in SCRIPTS_FILE_GLOBS:
            names.extend(
                relative_name(p, folder) for p in sorted(folder.rglob(pattern)) if p.is_file()
            )
        if (folder / SCRIPTS_CONFIG_FILE).is_file():
            names.append(SCRIPTS_CONFIG_FILE)
        return names

    def _pack_folder(self, folder: Path, archive_path: Path, result: ScriptsPackResult) -> None:
        names = self.list_script_files(folder)

        # config.json alone is not a scripts package
        if len(names) <= 1:
            message = f"No script files found in {folder}"
            logger.warning(message)
            result.warnings.append(message)
            return

        try:
            if archive_path.exists():
                archive_path.unlink()
            create_zip(folder, names, archive_path)
        except OSError as e:
            raise PackError(f"Failed to create {archive_path}: {e}")

        logger.info(f"Created {archive_path} ({len(names)} file(s))")
        result.generated.append(archive_path)

    @staticmethod
    def _standardize_names(archives: List[Path]):
        renamed = []
        for archive in archives:
            match = SCRIPTS_STANDARD_NAME_PATTERN.match(archive.name)
            if not match:
                continue

            target = archive.with_name(f"scripts{match.group(1)}{match.group(2) or ''}.zip")
            try:
                archive.replace(target)
            except OSError as e:
                raise PackError(f"Failed to rename {archive} to {target}: {e}")

            logger.info(f"Renamed {archive.name} to {target.name}")
            renamed.append((archive, target))
        return renamed
