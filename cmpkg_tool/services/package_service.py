"""Package service implementation"""

import logging
import time
from pathlib import Path
from typing import Optional

from ..api.exceptions import FolderNotFoundError, PackError
from ..constants import KEY_COMPANY, KEY_DEVELOP, PACKAGE_EXTENSION
from ..core.manifest_resolver import ManifestResolver
from ..core.naming import archive_prefix, build_archive_name
from ..models.result import PackResult
from ..utils.file_utils import create_zip, delete_with_prefix, ensure_directory, list_file_names
from .manifest_service import ManifestService

logger = logging.getLogger(__name__)


class PackageService:
    """Builds .cmpkg archives from package folders"""

    def __init__(self,
                 manifest_service: Optional[ManifestService] = None,
                 resolver: Optional[ManifestResolver] = None):
        self.manifest_service = manifest_service or ManifestService()
        self.resolver = resolver or ManifestResolver()

    def pack(self,
             folder: Path,
             output: Optional[Path] = None,
             version: Optional[str] = None,
             develop: bool = False) -> PackResult:
        """
        Package a folder into a .cmpkg archive

        Steps: read the manifest source, resolve it against the folder,
        write manifesto.dat, delete older archives of the same package in
        the output folder and zip the resolved files.

        Args:
            folder: Package folder with manifesto.server or manifesto.local
            output: Output folder (defaults to the package folder)
            version: Version overriding the manifest version
            develop: Mark the package as a development build

        Returns:
            Pack result

        Raises:
            FolderNotFoundError: If folder does not exist
            ManifestNotFoundError: If the folder has no manifest source
            ManifestFormatError: If the manifest is not valid
            ManifestResolutionError: If the manifest cannot be resolved
            PackError: If writing the archive fails
        """
        started = time.monotonic()

        folder = Path(folder)
        if not folder.is_dir():
            raise FolderNotFoundError(folder)
        output = Path(output) if output else folder

        manifest = self.manifest_service.load_manifest(folder)

        if version and version.strip():
            manifest.version = version.strip()
        manifest.extras[KEY_DEVELOP] = develop

        company_code = manifest.extras.get(KEY_COMPANY)
        if not isinstance(company_code, str):
            company_code = None

        try:
            prefix = archive_prefix(company_code, manifest.name)
            archive_name = build_archive_name(company_code, manifest.version, manifest.name)
        except ValueError as e:
            raise PackError(str(e))

        # Older builds of this package are never part of the package itself
        listing = [
            name for name in list_file_names(folder)
            if not (name.lower().startswith(prefix) and name.lower().endswith(PACKAGE_EXTENSION))
        ]

        resolution = self.resolver.resolve(manifest, listing)

        try:
            manifest_path = self.manifest_service.save_manifest(resolution.manifest, folder)

            ensure_directory(output)
            for old in delete_with_prefix(output, prefix, PACKAGE_EXTENSION):
                logger.info(f"Removed previous archive {old.name}")

            archive_path = output / archive_name
            written = create_zip(folder, resolution.files, archive_path)
        except OSError as e:
            raise PackError(f"Failed to package {folder}: {e}")

        warnings = [
            f"File not found, not packaged: {name}"
            for name in resolution.files if name not in written
        ]

        logger.info(f"Created {archive_path} ({len(written)} file(s))")

        return PackResult(
            archive_path=archive_path,
            manifest_path=manifest_path,
            files=written,
            warnings=warnings,
            duration=time.monotonic() - started
        )
