"""
Custom exceptions for the BORDERS API client library.
"""


class BordersAPIError(Exception):
    """Base exception for BORDERS client errors."""
    pass


class InvalidCredentialsError(BordersAPIError):
    """Raised when the API keys are not 64 character strings."""
    pass


class InvalidBodyError(BordersAPIError):
    """Raised when a request body is not a mapping."""
    pass


class TransportError(BordersAPIError):
    """Raised when the HTTP request itself fails (connection, timeout)."""

    def __init__(self, message, original=None):
        super().__init__(message)
        self.original = original


class InvalidResponseError(BordersAPIError):
    """Raised when the response body cannot be decoded or is empty."""
    pass


class MalformedEnvelopeError(BordersAPIError):
    """Raised when the decoded response has no 'response' field."""
    pass


class UploadNotSupportedError(BordersAPIError):
    """Raised by put(); file uploads are not implemented."""
    pass


class ConfigurationError(BordersAPIError):
    """Raised when client configuration is invalid."""
    pass
