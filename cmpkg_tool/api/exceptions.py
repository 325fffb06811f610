"""Exception definitions for cmpkg-tool API"""

from ..constants import ErrorCode


class CmpkgToolError(Exception):
    """Base exception for cmpkg-tool"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ValidationError(CmpkgToolError):
    """Validation error"""

    def __init__(self, message: str, error_code: str = ErrorCode.MANIFEST_VALIDATION_FAILED):
        super().__init__(message, error_code)


class InvalidEnvironmentError(ValidationError):
    """Deploy environment is not one of the accepted names"""

    def __init__(self, environment: str, valid_environments):
        message = (
            f"Invalid environment '{environment}'. "
            f"Allowed values: {', '.join(valid_environments)}"
        )
        super().__init__(message, ErrorCode.INVALID_ENVIRONMENT)
        self.environment = environment


class ConfigError(CmpkgToolError):
    """Configuration error"""

    def __init__(self, message: str, error_code: str = ErrorCode.CONFIG_FORMAT_ERROR):
        super().__init__(message, error_code)


class MissingCredentialsError(ConfigError):
    """Storage credentials could not be resolved"""

    def __init__(self, credential: str, option: str, env_var: str):
        message = (
            f"{credential} not provided. "
            f"Use the {option} option or the {env_var} environment variable"
        )
        super().__init__(message, ErrorCode.MISSING_CREDENTIALS)
        self.credential = credential


class PathError(CmpkgToolError):
    """Path related error"""
    pass


class FolderNotFoundError(PathError):
    """Source folder does not exist"""

    def __init__(self, folder):
        super().__init__(f"Folder not found: {folder}", ErrorCode.SOURCE_NOT_FOUND)
        self.folder = folder


class ManifestError(CmpkgToolError):
    """Manifest related error"""
    pass


class ManifestNotFoundError(ManifestError):
    """No manifest source file in the package folder"""

    def __init__(self, folder, candidates):
        message = f"No manifest found in {folder} (looked for: {', '.join(candidates)})"
        super().__init__(message, ErrorCode.MANIFEST_NOT_FOUND)
        self.folder = folder


class ManifestFormatError(ManifestError):
    """Manifest content is not valid"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.MANIFEST_VALIDATION_FAILED)


class ManifestResolutionError(ManifestError):
    """Manifest entries could not be bound to the folder contents"""
    pass


class ManifestEntryNotFoundError(ManifestResolutionError):
    """A file named by the manifest is missing from the folder"""

    def __init__(self, name: str):
        super().__init__(
            f"File listed in manifest not found: {name}",
            ErrorCode.MANIFEST_ENTRY_NOT_FOUND
        )
        self.name = name


class PatternNoMatchError(ManifestResolutionError):
    """A manifest pattern matched no file in the folder"""

    def __init__(self, pattern: str):
        super().__init__(
            f"No file found for manifest pattern: {pattern}",
            ErrorCode.PATTERN_NO_MATCH
        )
        self.pattern = pattern


class InvalidPatternError(ManifestResolutionError):
    """A manifest pattern is not a valid regular expression"""

    def __init__(self, pattern: str, reason: str):
        super().__init__(
            f"Invalid manifest pattern '{pattern}': {reason}",
            ErrorCode.INVALID_PATTERN
        )
        self.pattern = pattern


class PackError(CmpkgToolError):
    """Packing operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PACK_FAILED)


class StorageError(CmpkgToolError):
    """Storage operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STORAGE_ERROR)
