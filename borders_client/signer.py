"""
Request signing for the BORDERS API.

The server recomputes the signature independently, so the signable
string must be built exactly as below:

    method + public_key + private_key + path
           + key1 + value1 + key2 + value2 ...   (every param but 'signature')
           + body

The signature is the base64 encoded SHA-256 digest of that string with
trailing '+' and '=' characters stripped.
"""

import base64
import hashlib
from typing import Mapping, Optional

from .constants import PARAM_SIGNATURE


def signable_string(method: str, public_key: str, private_key: str, path: str,
                    params: Mapping[str, object], body: Optional[str] = "") -> str:
    """
    Build the string the signature is computed over.

    Args:
        method: Upper-case HTTP method
        public_key: Public half of the API credentials
        private_key: Private half of the API credentials
        path: Normalized request path (leading '/')
        params: Query parameters in the order they appear in the URL
        body: Serialized request body, empty when there is none

    Returns:
        The concatenated signable string
    """
    parts = [method, public_key, private_key, path]
    for key, value in params.items():
        if key == PARAM_SIGNATURE:
            continue
        parts.append(key)
        parts.append(str(value))
    parts.append(body or "")
    return "".join(parts)


def sign(method: str, public_key: str, private_key: str, path: str,
         params: Mapping[str, object], body: Optional[str] = "") -> str:
    """
    Compute the request signature.

    Any 'signature' entry already present in params is ignored.
    """
    message = signable_string(method, public_key, private_key, path, params, body)
    digest = hashlib.sha256(message.encode('utf-8')).digest()
    return base64.b64encode(digest).decode('ascii').rstrip('+=')
