"""
Central constants for the action-to-qiniu package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# Configuration Defaults
# ============================================================================

# Configuration file looked up when --config is not given
DEFAULT_CONFIG_PATH = "config.json"

# Directory artifacts are extracted into
DEFAULT_DOWNLOAD_DIR = "./artifacts"

# Inclusion patterns used when none are configured
DEFAULT_PATTERNS = ["**/*"]

# Base path destination keys are joined under
DEFAULT_CDN_BASE_PATH = "/"

# Post-process command timeout (milliseconds, as in the config file)
DEFAULT_SCRIPT_TIMEOUT_MS = 30000

# ============================================================================
# Artifact Store Constants
# ============================================================================

DEFAULT_GITHUB_API_URL = "https://api.github.com"

GITHUB_API_VERSION = "2022-11-28"

# Page size for artifact listings (API maximum)
ARTIFACTS_PER_PAGE = 100

# Artifacts older than this are likely expired by the store
ARTIFACT_RETENTION_DAYS = 90

# Timeout for archive downloads (seconds)
DOWNLOAD_TIMEOUT = 300.0

# Chunk size bounds for streaming archive downloads
DOWNLOAD_CHUNK_SIZE = 8192
DOWNLOAD_MAX_CHUNK_SIZE = 65536

# ============================================================================
# Object Storage Constants
# ============================================================================

# Upload hosts per storage zone
QINIU_UPLOAD_HOSTS = {
    "z0": "https://up.qiniup.com",
    "z1": "https://up-z1.qiniup.com",
    "z2": "https://up-z2.qiniup.com",
    "na0": "https://up-na0.qiniup.com",
    "as0": "https://up-as0.qiniup.com",
}

# Lifetime of an upload token (seconds)
DEFAULT_TOKEN_TTL = 3600

# Response body requested from the storage on successful uploads
UPLOAD_RETURN_BODY = '{"key":"$(key)","hash":"$(etag)","fsize":$(fsize)}'

# ============================================================================
# Retry and Concurrency Constants
# ============================================================================

# HTTP status codes that should trigger a per-file retry
# 573 and 599 are the storage provider's rate-limit and transient server codes
RETRY_STATUS_CODES = [429, 500, 502, 503, 504, 573, 599]

# Extra attempts per file for transient upload errors
DEFAULT_MAX_RETRIES = 3

# Initial backoff between attempts (seconds); doubles each attempt
RETRY_BACKOFF_FACTOR = 0.5

# Maximum backoff between attempts (seconds)
RETRY_MAX_BACKOFF = 30.0

# Default number of concurrent uploads (sequential)
DEFAULT_MAX_WORKERS = 1

# Upper bound on concurrent uploads
MAX_WORKERS_LIMIT = 32

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

# Number of trailing stderr lines kept in transform failures
STDERR_TAIL_LINES = 20

# Width for separator lines in the run report
SEPARATOR_WIDTH = 47
