"""
BORDERS API client.

This module provides the BordersClient, which signs each request with the
account's public/private key pair, sends it with requests and unwraps the
{"response": ...} envelope returned by the API.
"""

import json
import logging
import os
import threading
from typing import Any, Dict, Mapping, Optional

import requests

from .constants import (
    CONTENT_TYPE_JSON,
    DEFAULT_CONFIG,
    ENV_HOST,
    ENV_PRIVATE_KEY,
    ENV_PUBLIC_KEY,
    ENV_SECURE,
    ENV_TIMEOUT,
    KEY_LENGTH,
    RESPONSE_KEY
)
from .exceptions import (
    ConfigurationError,
    InvalidCredentialsError,
    InvalidResponseError,
    MalformedEnvelopeError,
    TransportError,
    UploadNotSupportedError
)
from .request import BordersRequest, build_request

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


class BordersClient:
    """
    Client for making signed requests to the BORDERS API.

    Every call injects 'public_key' and 'expires' into the query string,
    appends the request signature and returns the payload found under the
    'response' key of the decoded JSON reply.
    """

    def __init__(self, public_key: str, private_key: str,
                 session: Optional[requests.Session] = None, **config):
        """
        Initialize the client.

        Args:
            public_key: The 64 character public portion of the API credentials
            private_key: The 64 character private portion of the API credentials
            session: Optional requests.Session to send requests with
            **config: Configuration options (secure, timeout, host)

        Raises:
            InvalidCredentialsError: When either key is not 64 characters long
            ConfigurationError: When a configuration option is invalid
        """
        if not _valid_key(public_key) or not _valid_key(private_key):
            raise InvalidCredentialsError("API keys appear invalid")

        self._public_key = public_key
        self._private_key = private_key

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}
        self._validate_config()

        self._lock = threading.Lock()
        self._secure = self.config['secure']
        self._timeout = self.config['timeout']
        self.host = self.config['host']

        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **config) -> "BordersClient":
        """
        Build a client from BORDERS_* environment variables.

        BORDERS_PUBLIC_KEY and BORDERS_PRIVATE_KEY are required;
        BORDERS_SECURE, BORDERS_TIMEOUT and BORDERS_HOST are optional.
        Keyword arguments take precedence over the environment.
        """
        environ = os.environ if environ is None else environ

        public_key = environ.get(ENV_PUBLIC_KEY, "")
        private_key = environ.get(ENV_PRIVATE_KEY, "")
        if not public_key or not private_key:
            raise ConfigurationError(
                f"Missing env vars: {ENV_PUBLIC_KEY} and/or {ENV_PRIVATE_KEY}"
            )

        env_config = {}
        if ENV_SECURE in environ:
            env_config['secure'] = environ[ENV_SECURE].strip().lower() in _TRUE_VALUES
        if ENV_TIMEOUT in environ:
            try:
                env_config['timeout'] = int(environ[ENV_TIMEOUT])
            except ValueError:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be an integer, got {environ[ENV_TIMEOUT]!r}"
                )
        if environ.get(ENV_HOST):
            env_config['host'] = environ[ENV_HOST]

        return cls(public_key, private_key, **{**env_config, **config})

    def _validate_config(self):
        """Validate client configuration."""
        self.config['secure'] = _check_secure(self.config['secure'])
        self.config['timeout'] = _check_timeout(self.config['timeout'])

        if not self.config['host']:
            raise ConfigurationError("host cannot be empty")

    @property
    def public_key(self) -> str:
        return self._public_key

    def is_secure(self) -> bool:
        """Return True when requests are made over https."""
        with self._lock:
            return self._secure

    def set_secure(self, secure: bool):
        secure = _check_secure(secure)
        with self._lock:
            self._secure = secure
            self.config['secure'] = secure

    def get_timeout(self) -> int:
        """Return the number of seconds used for the timeout."""
        with self._lock:
            return self._timeout

    def set_timeout(self, timeout: int):
        """
        Set the number of seconds used both as the HTTP timeout and as the
        lifetime of the request ('expires' query parameter).

        Raises:
            ConfigurationError: If timeout is not a positive integer
        """
        timeout = _check_timeout(timeout)
        with self._lock:
            self._timeout = timeout
            self.config['timeout'] = timeout

    def _snapshot(self):
        with self._lock:
            return self._secure, self._timeout

    def prepare(self, method: str, path: str, params: Optional[Mapping] = None,
                body: Any = None) -> BordersRequest:
        """
        Build and sign a request without sending it.

        Raises:
            InvalidBodyError: If body is not a mapping
        """
        secure, timeout = self._snapshot()
        return self._build(method, path, params, body, secure, timeout)

    def _build(self, method, path, params, body, secure, timeout) -> BordersRequest:
        return build_request(
            method,
            path,
            self._public_key,
            self._private_key,
            timeout,
            scheme='https' if secure else 'http',
            host=self.host,
            params=params,
            body=body
        )

    def _transport_options(self, request: BordersRequest, timeout: int,
                           overrides: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Default requests arguments, with caller overrides taking precedence."""
        options = {
            'headers': {'Content-Type': CONTENT_TYPE_JSON},
            'timeout': timeout,
        }
        if request.body is not None:
            options['data'] = request.body.encode('utf-8')

        overrides = dict(overrides or {})
        if 'headers' in overrides:
            options['headers'].update(overrides.pop('headers') or {})
        options.update(overrides)
        return options

    def _send_request(self, method: str, path: str, params: Optional[Mapping] = None,
                      body: Any = None,
                      transport_options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Build, sign and send a request, returning the unwrapped response.

        Args:
            method: HTTP method
            path: Path being requested
            params: Query parameters
            body: Mapping to send as JSON, may be None
            transport_options: Extra requests arguments overriding the defaults

        Returns:
            The decoded value of the 'response' field

        Raises:
            InvalidBodyError: If body is not a mapping
            TransportError: If the HTTP request fails
            InvalidResponseError: If the response is not JSON or is empty
            MalformedEnvelopeError: If the response has no 'response' field
        """
        secure, timeout = self._snapshot()
        request = self._build(method, path, params, body, secure, timeout)
        options = self._transport_options(request, timeout, transport_options)

        logger.debug("%s %s (secure=%s, timeout=%ss)", request.method, request.path, secure, timeout)

        try:
            response = self.session.request(request.method, request.url, **options)
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}", original=e) from e

        logger.debug("%s %s returned %s (%d bytes)",
                     request.method, request.path, response.status_code, len(response.content or b""))

        return _unwrap(response.text)

    def get(self, path: str, params: Optional[Mapping] = None,
            transport_options: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a signed GET request."""
        return self._send_request('GET', path, params, None, transport_options)

    def post(self, path: str, body: Mapping, params: Optional[Mapping] = None,
             transport_options: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a signed POST request with a JSON body."""
        return self._send_request('POST', path, params, body, transport_options)

    def put(self, path: str, body: Any = None, params: Optional[Mapping] = None,
            transport_options: Optional[Mapping[str, Any]] = None):
        """
        Reserved for file uploads, which are not implemented.

        Raises:
            UploadNotSupportedError: Always, without sending anything
        """
        raise UploadNotSupportedError("PUT (file upload) is not supported by this client")

    def delete(self, path: str, params: Optional[Mapping] = None,
               transport_options: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a signed DELETE request."""
        return self._send_request('DELETE', path, params, None, transport_options)

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def _valid_key(key) -> bool:
    return isinstance(key, str) and len(key) == KEY_LENGTH


def _check_secure(secure) -> bool:
    if isinstance(secure, str):
        raise ConfigurationError(f"secure must be a boolean, got {secure!r}")
    return bool(secure)


def _check_timeout(timeout) -> int:
    try:
        timeout = int(timeout)
    except (TypeError, ValueError):
        raise ConfigurationError(f"timeout must be an integer, got {timeout!r}")
    if timeout <= 0:
        raise ConfigurationError("timeout must be positive")
    return timeout


def _unwrap(text: str) -> Any:
    """Decode a response body and return its 'response' field."""
    try:
        data = json.loads(text)
    except ValueError:
        raise InvalidResponseError("Unable to decode response data")

    if not data:
        raise InvalidResponseError("Unable to decode response data")

    if not isinstance(data, dict) or RESPONSE_KEY not in data:
        raise MalformedEnvelopeError("Improper response data")

    return data[RESPONSE_KEY]
