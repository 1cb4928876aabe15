"""Global constants used throughout the storage adapter.

This module centralizes the error codes, API endpoints, header values and
environment variable names shared by the adapter, the service layer and the
Cloudflare infrastructure code.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"

# Remote Image Store Errors
ERROR_CODE_IMAGE_LOOKUP_FAILED = "IMAGE_LOOKUP_FAILED"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DELETION_FAILED = "IMAGE_DELETION_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


# ============================================================================
# Cloudflare Images API
# ============================================================================

CLOUDFLARE_IMAGES_API_BASE_URL: Final[str] = "https://api.cloudflare.com/client/v4"
IMAGES_API_PATH_TEMPLATE: Final[str] = "{base_url}/accounts/{account_id}/images/v1"

DEFAULT_VARIANT: Final[str] = "public"
DEFAULT_ID_PREFIX: Final[str] = ""

ACCEPT_HEADER_VALUE = "application/json"
UPLOAD_ID_FIELD = "id"
UPLOAD_FILE_FIELD = "file"

HTTP_STATUS_NOT_FOUND = 404

# ============================================================================
# Filename Sanitization
# ============================================================================

# Anything outside word characters, "@" and "." is replaced.
UNSAFE_FILENAME_PATTERN = r"[^\w@.]"
FILENAME_REPLACEMENT = "-"

# ============================================================================
# Logging
# ============================================================================

LOGGER_SERVICE_NAME = "cloudflare-images-storage"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_ACCOUNT_ID = "CF_IMAGES_ACCOUNT_ID"
ENV_AUTH_TOKEN = "CF_IMAGES_AUTH_TOKEN"
ENV_CDN_BASE_URL = "CF_IMAGES_CDN_BASE_URL"
ENV_VARIANT = "CF_IMAGES_VARIANT"
ENV_ID_PREFIX = "CF_IMAGES_ID_PREFIX"
ENV_OVERWRITE = "CF_IMAGES_OVERWRITE"
ENV_API_BASE_URL = "CF_IMAGES_API_BASE_URL"

TRUTHY_ENV_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
