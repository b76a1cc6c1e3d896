"""
Request construction for the BORDERS API.

Turns a method, path, optional body and optional query parameters into
a signed BordersRequest ready to hand to the HTTP transport.
"""

import json
import time
from collections.abc import Mapping
from typing import Any, Dict, NamedTuple, Optional
from urllib.parse import quote_plus

from .constants import (
    BODY_REQUEST_KEY,
    PARAM_EXPIRES,
    PARAM_PUBLIC_KEY,
    PARAM_SIGNATURE
)
from .exceptions import InvalidBodyError
from .signer import sign


class BordersRequest(NamedTuple):
    """A fully built and signed request."""
    method: str
    url: str
    path: str
    params: Dict[str, str]
    body: Optional[str]


def normalize_path(path: str) -> str:
    """Make sure the path starts with a '/'."""
    if not path.startswith('/'):
        path = '/' + path
    return path


def prepare_params(params: Optional[Mapping], public_key: str, timeout: int,
                   now: Optional[float] = None) -> Dict[str, str]:
    """
    Copy the caller's query parameters and inject the authentication defaults.

    'public_key' and 'expires' are only set when the caller did not supply
    them. A caller supplied 'signature' is dropped; requests are never
    pre-signed.
    """
    prepared = {str(key): str(value) for key, value in (params or {}).items()}

    if PARAM_PUBLIC_KEY not in prepared:
        prepared[PARAM_PUBLIC_KEY] = public_key
    if PARAM_EXPIRES not in prepared:
        if now is None:
            now = time.time()
        prepared[PARAM_EXPIRES] = str(int(now) + int(timeout))

    prepared.pop(PARAM_SIGNATURE, None)
    return prepared


def prepare_body(body: Any) -> Optional[str]:
    """
    Wrap and serialize a request body.

    Returns None when there is no body. The returned string is both
    signed and sent, byte for byte.

    Raises:
        InvalidBodyError: If body is not a mapping or cannot be serialized
    """
    if body is None:
        return None

    if not isinstance(body, Mapping):
        raise InvalidBodyError(
            f"Body should be a mapping, got {type(body).__name__}"
        )

    if BODY_REQUEST_KEY not in body:
        body = {BODY_REQUEST_KEY: body}

    try:
        return json.dumps(body, indent=4)
    except (TypeError, ValueError) as e:
        raise InvalidBodyError(f"Body is not JSON serializable: {e}") from e


def build_query(params: Mapping[str, str]) -> str:
    """Join params as key=value pairs, url-encoding the values."""
    return '&'.join(f"{key}={quote_plus(str(value))}" for key, value in params.items())


def build_url(scheme: str, host: str, path: str, params: Mapping[str, str]) -> str:
    return f"{scheme}://{host}{path}?{build_query(params)}"


def build_request(method: str, path: str, public_key: str, private_key: str,
                  timeout: int, scheme: str, host: str,
                  params: Optional[Mapping] = None, body: Any = None,
                  now: Optional[float] = None) -> BordersRequest:
    """
    Build a signed request.

    Args:
        method: HTTP method (GET, POST, DELETE)
        path: Request path, with or without leading '/'
        public_key: Public half of the API credentials
        private_key: Private half of the API credentials
        timeout: Seconds until the request expires
        scheme: 'http' or 'https'
        host: API host name
        params: Optional query parameters
        body: Optional mapping sent as the JSON body
        now: Unix time used for 'expires' (defaults to the current time)

    Returns:
        BordersRequest with 'signature' as the last query parameter

    Raises:
        InvalidBodyError: If body is not a mapping or cannot be serialized
    """
    method = method.upper()
    query = prepare_params(params, public_key, timeout, now=now)
    serialized = prepare_body(body)
    path = normalize_path(path)

    query[PARAM_SIGNATURE] = sign(method, public_key, private_key, path, query, serialized or "")

    return BordersRequest(
        method=method,
        url=build_url(scheme, host, path, query),
        path=path,
        params=query,
        body=serialized
    )
