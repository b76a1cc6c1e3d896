"""
Constants for the BORDERS API client library.
"""

# HTTP
CONTENT_TYPE_JSON = "application/json"
DEFAULT_HOST = "api.borders.biemedia.com"

# Query parameters injected into every request
PARAM_PUBLIC_KEY = "public_key"
PARAM_EXPIRES = "expires"
PARAM_SIGNATURE = "signature"

# Body / response envelope keys
BODY_REQUEST_KEY = "request"
RESPONSE_KEY = "response"

# API credentials are fixed-length strings
KEY_LENGTH = 64

# Default configuration values
DEFAULT_CONFIG = {
    'secure': False,        # use https when True
    'timeout': 60,          # seconds, also used for the expires parameter
    'host': DEFAULT_HOST,
}

# Environment variables read by BordersClient.from_env()
ENV_PUBLIC_KEY = "BORDERS_PUBLIC_KEY"
ENV_PRIVATE_KEY = "BORDERS_PRIVATE_KEY"
ENV_SECURE = "BORDERS_SECURE"
ENV_TIMEOUT = "BORDERS_TIMEOUT"
ENV_HOST = "BORDERS_HOST"
