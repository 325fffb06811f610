"""Global constants for cmpkg-tool"""

import re

APP_NAME = "cmpkg-tool"
LOG_FORMAT = "%(message)s"

# Package files
PACKAGE_EXTENSION = ".cmpkg"
MANIFEST_FILE = "manifesto.dat"
MANIFEST_SERVER_FILE = "manifesto.server"
MANIFEST_LOCAL_FILE = "manifesto.local"
MANIFEST_SOURCE_FILES = [MANIFEST_SERVER_FILE, MANIFEST_LOCAL_FILE]
RESERVED_MANIFEST_FILES = frozenset(
    name.lower() for name in (MANIFEST_FILE, MANIFEST_SERVER_FILE, MANIFEST_LOCAL_FILE)
)
DESCRIPTOR_GLOB = "*.dat"
ARCHIVE_GLOB = f"*{PACKAGE_EXTENSION}"
ARCHIVE_CONTENT_TYPE = "application/zip"

# Manifest JSON keys
KEY_NAME = "nome"
KEY_VERSION = "versao"
KEY_FILES = "arquivos"
KEY_PATTERN = "_pattern_nome"
KEY_DESTINATION = "destino"
KEY_DEVELOP = "develop"
KEY_COMPANY = "siglaEmpresa"

# Destinations and their packaging order
DEST_PACKAGE = "pacote"
DEST_SCRIPTS = "scripts"
DEST_SHARED = "shared"
DEST_SERVER = "server"
DEST_CLIENT = "client"

DESTINATION_WEIGHTS = {
    DEST_PACKAGE: -1000,
    DEST_SCRIPTS: 0,
    DEST_SHARED: 1000,
    DEST_SERVER: 2000,
    DEST_CLIENT: 3000,
}
DEFAULT_DESTINATION_WEIGHT = 5000

SCRIPTS_ARCHIVE_PATTERN = re.compile(r"_scripts(\d{0,2})(\S+)?\.zip", re.IGNORECASE)
EXECUTABLE_SUFFIX = ".exe"

# Scripts packaging
SCRIPTS_CONFIG_FILE = "config.json"
SCRIPTS_FILE_GLOBS = ["*.sql", "*.migration"]
SCRIPTS_FOLDER_PATTERN = re.compile(r"^(\d{2})(\S+)?$")
SCRIPTS_STANDARD_NAME_PATTERN = re.compile(r"^_scripts(\d{0,2})(\S+)?\.zip$")

# Environments
ENV_DEVELOPMENT = "desenvolvimento"
ENV_PRODUCTION = "producao"
ENV_STAGE = "stage"
VALID_ENVIRONMENTS = [ENV_DEVELOPMENT, ENV_PRODUCTION, ENV_STAGE]
DEFAULT_ENVIRONMENT = ENV_DEVELOPMENT

# Storage routing
PREFIX_PRODUCTION = "packages"
PREFIX_DEVELOPMENT = "packages-dev"
PREFIX_STAGE = "packages-stage"
DEFAULT_BUCKET = "ncr-colibri"
DEFAULT_REGION = "us-east-1"
S3_URL_TEMPLATE = "https://{bucket}.s3.amazonaws.com/{key}"
S3_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

# Marketplace
MARKETPLACE_URLS = {
    ENV_DEVELOPMENT: "https://qa-marketplace.ncrcolibri.com.br",
    ENV_STAGE: "https://qa-marketplace.ncrcolibri.com.br",
    ENV_PRODUCTION: "https://marketplace.ncrcolibri.com.br",
}
TEST_MARKETPLACE_URL = "http://localhost:8888"
MARKETPLACE_NOTIFY_PATH = "/api/secure/pacote/sync/"
DEFAULT_NOTIFY_TIMEOUT = 30  # seconds

# Marketplace token (HS256, compatible with the legacy marketplace)
TOKEN_ID = "93cc0ef1-eb78-4dba-acb8-1949a397ad38"
TOKEN_LEGACY_SECRET = "Colibri@Agile"
TOKEN_MIN_KEY_SIZE = 32  # bytes
TOKEN_TTL_MINUTES = 15

# Deploy outcome reasons
REASON_ALREADY_EXISTS = "already exists"

# Summary formats
SUMMARY_NONE = "none"
SUMMARY_CONSOLE = "console"
SUMMARY_MARKDOWN = "markdown"
SUMMARY_FORMATS = [SUMMARY_NONE, SUMMARY_CONSOLE, SUMMARY_MARKDOWN]

# Configuration
PROJECT_CONFIG_FILE = ".cmpkg-tool.yaml"


# Error codes
class ErrorCode:
    CONFIG_FORMAT_ERROR = "CT001"
    SOURCE_NOT_FOUND = "CT002"
    STORAGE_ERROR = "CT004"
    MANIFEST_VALIDATION_FAILED = "CT007"
    MANIFEST_NOT_FOUND = "CT010"
    MANIFEST_ENTRY_NOT_FOUND = "CT011"
    PATTERN_NO_MATCH = "CT012"
    INVALID_PATTERN = "CT013"
    INVALID_ENVIRONMENT = "CT014"
    MISSING_CREDENTIALS = "CT015"
    PACK_FAILED = "CT020"


# Environment variables
ENV_CONFIG_PATH = "CMPKG_TOOL_CONFIG"
ENV_LOG_LEVEL = "CMPKG_TOOL_LOG_LEVEL"
ENV_STAGE_OVERRIDE = "STAGE"
ENV_TEST_MODE = "TEST"
ENV_AWS_ACCESS_KEY = "AWS_ACCESS_KEY_ID"
ENV_AWS_SECRET_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_AWS_REGION = "AWS_REGION"
ENV_JWT_SECRET = "MARKETPLACE_JWT_SECRET"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_PACKAGE = "📦"
EMOJI_ROCKET = "🚀"
