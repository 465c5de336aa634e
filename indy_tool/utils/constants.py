"""
Central constants for the Indy Tool package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# Staging Directories
# ============================================================================

# Download staging directory, dropped between runs
DEFAULT_DOWNLOAD_DIR = "/tmp/download"

# Upload-side cache directory when no persistent mount is configured
DEFAULT_UPLOAD_DIR = "/tmp/upload"

# Environment variable naming a persistent mount for the upload cache
ENVAR_TEST_MOUNT_PATH = "TEST_MOUNT_PATH"

# Permissions for created staging directories
STAGING_DIR_MODE = 0o755

# ============================================================================
# Build Naming
# ============================================================================

# Prefix of generated build names; the rest is the version suffix
BUILD_TEST_PREFIX = "build-test-"

# Proxy user suffix asking the generic proxy to track the access
TRACKING_SUFFIX = "+tracking"

# Proxy password accepted by the generic proxy for tracked builds
DEFAULT_PROXY_PASSWORD = "pass"  # nosec B105

# ============================================================================
# Store Keys and Access Channels
# ============================================================================

GENERIC_PACKAGE_TYPE = "generic-http"

# Marker on a download URL that must be fetched through the generic proxy
PROXY_PREFIX = "proxy-"

# Generic remote repos are gone at replay time; their content was promoted to h- repos
GENERIC_REMOTE_PATH = "generic-http/remote/r-"
GENERIC_HOSTED_PATH = "generic-http/hosted/h-"

SHARED_IMPORTS_SUFFIX = ":hosted:shared-imports"
SHARED_IMPORTS_PATH = "hosted/shared-imports"
PNC_BUILDS_PATH = "hosted/pnc-builds"

# Upstream aliases whose content is promoted into shared-imports
SHARED_IMPORTS_PROMOTION_SOURCES = ("npm:remote:npmjs", "maven:remote:central")

# Stores whose content is promoted into pnc-builds
PNC_BUILDS_PROMOTION_SOURCES = ("maven:remote:mrrc-ga-rh",)
PNC_BUILD_STORE_PREFIX = "maven:hosted:build-"

SUPPORTED_PACKAGE_TYPES = ["maven", "npm"]

# ============================================================================
# API Paths
# ============================================================================

CONTENT_API_PATH = "api/content"
FOLO_TRACK_API_PATH = "api/folo/track"
FOLO_ADMIN_API_PATH = "api/folo/admin"
STORES_API_PATH = "api/admin/stores"

# ============================================================================
# Timing
# ============================================================================

# Delay after each migration delete for the destination to index the removal (seconds)
MIGRATION_DELETE_DELAY = 0.1

# Wait before migrating for the origin to finish promotion/indexing events (seconds)
MIGRATION_SETTLE_DELAY = 120.0

# Default timeout for HTTP requests (seconds), large enough for big archives
DEFAULT_TIMEOUT = 300.0

# ============================================================================
# Concurrency
# ============================================================================

DEFAULT_WORKERS = 1
MAX_WORKERS = 100

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Width for banner separator lines in console output
SEPARATOR_WIDTH = 42

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_GENERAL_ERROR = 1
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

# ============================================================================
# Default Paths
# ============================================================================

DEFAULT_CONFIG_PATH = "~/.config/indy/replay.toml"

# ============================================================================
# HTTP Status Codes
# ============================================================================

HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409


__all__ = [
    "DEFAULT_DOWNLOAD_DIR",
    "DEFAULT_UPLOAD_DIR",
    "ENVAR_TEST_MOUNT_PATH",
    "STAGING_DIR_MODE",
    "BUILD_TEST_PREFIX",
    "TRACKING_SUFFIX",
    "DEFAULT_PROXY_PASSWORD",
    "GENERIC_PACKAGE_TYPE",
    "PROXY_PREFIX",
    "GENERIC_REMOTE_PATH",
    "GENERIC_HOSTED_PATH",
    "SHARED_IMPORTS_SUFFIX",
    "SHARED_IMPORTS_PATH",
    "PNC_BUILDS_PATH",
    "SHARED_IMPORTS_PROMOTION_SOURCES",
    "PNC_BUILDS_PROMOTION_SOURCES",
    "PNC_BUILD_STORE_PREFIX",
    "SUPPORTED_PACKAGE_TYPES",
    "CONTENT_API_PATH",
    "FOLO_TRACK_API_PATH",
    "FOLO_ADMIN_API_PATH",
    "STORES_API_PATH",
    "MIGRATION_DELETE_DELAY",
    "MIGRATION_SETTLE_DELAY",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WORKERS",
    "MAX_WORKERS",
    "SEPARATOR_WIDTH",
    "EXIT_GENERAL_ERROR",
    "EXIT_USER_INTERRUPT",
    "DEFAULT_CONFIG_PATH",
    "HTTP_STATUS_NOT_FOUND",
    "HTTP_STATUS_CONFLICT",
]
