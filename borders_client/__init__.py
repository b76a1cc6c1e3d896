"""
BORDERS API Client Library

A Python client library that signs requests for the BORDERS API with a
public/private key pair and unwraps the API's response envelope.

Example usage:
    from borders_client import BordersClient

    client = BordersClient(public_key, private_key, secure=True)
    payload = client.get("/ping")
"""

import logging

from .client import BordersClient
from .exceptions import (
    BordersAPIError,
    InvalidCredentialsError,
    InvalidBodyError,
    TransportError,
    InvalidResponseError,
    MalformedEnvelopeError,
    UploadNotSupportedError,
    ConfigurationError
)
from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_HOST,
    KEY_LENGTH
)
from .request import BordersRequest, build_request
from .signer import sign, signable_string

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "BordersClient",
    "BordersRequest",
    "BordersAPIError",
    "InvalidCredentialsError",
    "InvalidBodyError",
    "TransportError",
    "InvalidResponseError",
    "MalformedEnvelopeError",
    "UploadNotSupportedError",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "DEFAULT_HOST",
    "KEY_LENGTH",
    "build_request",
    "sign",
    "signable_string"
]
