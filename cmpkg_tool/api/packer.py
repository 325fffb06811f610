"""Packer API for packaging operations"""

from pathlib import Path
from typing import Optional, Union

from ..models import PackResult, ScriptsPackResult
from ..services.package_service import PackageService
from ..services.scripts_service import ScriptsService

PathLike = Union[str, Path]


class Packer:
    """Packer class for packaging operations"""

    def __init__(self,
                 package_service: Optional[PackageService] = None,
                 scripts_service: Optional[ScriptsService] = None):
        self.package_service = package_service or PackageService()
        self.scripts_service = scripts_service or ScriptsService()

    def pack(self,
             folder: PathLike,
             output: Optional[PathLike] = None,
             version: Optional[str] = None,
             develop: bool = False) -> PackResult:
        """
        Package a folder into a .cmpkg archive

        Args:
            folder: Package folder
            output: Output folder (defaults to the package folder)
            version: Version overriding the manifest version
            develop: Mark the package as a development build

        Returns:
            PackResult: Packaging result
        """
        return self.package_service.pack(
            Path(folder),
            Path(output) if output else None,
            version=version,
            develop=develop
        )

    def pack_scripts(self,
                     folder: PathLike,
                     output: Optional[PathLike] = None,
                     standardize_names: bool = False) -> ScriptsPackResult:
        """
        Package database scripts

        Returns:
            ScriptsPackResult: Generated and renamed archives
        """
        return self.scripts_service.pack(
            Path(folder),
            Path(output) if output else None,
            standardize_names=standardize_names
        )


def pack(folder: PathLike, **options) -> PackResult:
    """
    Package a folder (convenience function)

    Args:
        folder: Package folder
        **options: Options
            - output: Output folder
            - version: Version override
            - develop: Development build flag

    Returns:
        PackResult: Packaging result
    """
    return Packer().pack(folder, **options)
