"""Archive naming rules"""

from typing import Optional

from ..constants import PACKAGE_EXTENSION


def archive_prefix(company_code: Optional[str], name: str) -> str:
    """
    Get the part of the archive name that precedes the version

    Args:
        company_code: Optional company code
        name: Package name

    Returns:
        Prefix such as ``acme-mypkg_``

    Raises:
        ValueError: If name is empty
    """
    clean_name = (name or "").lower().replace(" ", "")
    if not clean_name:
        raise ValueError("Package name is required")

    if company_code:
        return f"{company_code.lower()}-{clean_name}_"
    return f"{clean_name}_"


def build_archive_name(company_code: Optional[str], version: str, name: str) -> str:
    """
    Build the canonical archive file name of a package

    Args:
        company_code: Optional company code, lower-cased as prefix
        version: Package version, dots become underscores
        name: Package name, lower-cased with spaces removed

    Returns:
        File name like ``acme-mypkg_1_2_3.cmpkg``

    Raises:
        ValueError: If name or version is empty
    """
    if not version:
        raise ValueError("Package version is required")

    return f"{archive_prefix(company_code, name)}{version.replace('.', '_')}{PACKAGE_EXTENSION}"
