"""Application-wide constants for varnish-agent.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Management API server
    "DEFAULT_API_HOST",
    "DEFAULT_API_PORT",
    "AUTH_REALM",
    "GZIP_MINIMUM_SIZE",
    # Engine connection
    "DEFAULT_ENGINE_URL",
    "DEFAULT_ENGINE_TIMEOUT_SECONDS",
    "MIN_ENGINE_TIMEOUT_SECONDS",
    "MAX_ENGINE_TIMEOUT_SECONDS",
    # Static assets
    "INDEX_FILE",
    "STATIC_PREFIX",
    "ROOT_CACHE_MAX_AGE_SECONDS",
    "STATIC_CACHE_MAX_AGE_SECONDS",
    "STATIC_SHARED_CACHE_MAX_AGE_SECONDS",
    # Environment overrides
    "AUTH_ENV_VAR",
    "ENGINE_URL_ENV_VAR",
    "ADMIN_PATH_ENV_VAR",
    # CLI client
    "DEFAULT_AGENT_URL",
    "CLI_REQUEST_TIMEOUT_SECONDS",
]

APP_NAME = "varnish-agent"

# =============================================================================
# Management API server
# =============================================================================

DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 4000

# Realm announced in WWW-Authenticate when basic auth rejects a request
AUTH_REALM = APP_NAME

# Responses smaller than this are sent uncompressed
GZIP_MINIMUM_SIZE = 1024

# =============================================================================
# Engine connection
# =============================================================================

DEFAULT_ENGINE_URL = "http://127.0.0.1:4001"
DEFAULT_ENGINE_TIMEOUT_SECONDS = 10
MIN_ENGINE_TIMEOUT_SECONDS = 1
MAX_ENGINE_TIMEOUT_SECONDS = 300

# =============================================================================
# Static assets (admin web UI)
# =============================================================================

INDEX_FILE = "index.html"
STATIC_PREFIX = "static"

# Root page is re-fetched often, hashed static bundles are immutable
ROOT_CACHE_MAX_AGE_SECONDS = 10
STATIC_CACHE_MAX_AGE_SECONDS = 365 * 24 * 3600
STATIC_SHARED_CACHE_MAX_AGE_SECONDS = 60 * 60

# =============================================================================
# Environment overrides (read once at config load)
# =============================================================================

AUTH_ENV_VAR = "AUTH"
ENGINE_URL_ENV_VAR = "VARNISH_AGENT_ENGINE_URL"
ADMIN_PATH_ENV_VAR = "VARNISH_AGENT_ADMIN_PATH"

# =============================================================================
# CLI client
# =============================================================================

DEFAULT_AGENT_URL = f"http://{DEFAULT_API_HOST}:{DEFAULT_API_PORT}"
CLI_REQUEST_TIMEOUT_SECONDS = 10.0
