#!/usr/bin/env python3
"""
Basic usage examples for the BORDERS API client library.

Reads the API credentials from BORDERS_PUBLIC_KEY / BORDERS_PRIVATE_KEY
and makes a few signed requests.
"""

import json
import logging
import sys

from borders_client import BordersAPIError, BordersClient, UploadNotSupportedError


def main():
    """Run basic usage examples."""

    logging.basicConfig(level=logging.DEBUG)

    print("=== BORDERS Python Client Basic Usage Examples ===\n")

    # Create client
    print("1. Creating client from environment...")
    try:
        client = BordersClient.from_env(secure=True)
    except BordersAPIError as e:
        print(f"   ✗ {e}")
        return 1
    print(f"   Host: {client.host}")
    print(f"   Public key: {client.public_key[:8]}...")
    print(f"   Timeout: {client.get_timeout()}s\n")

    with client:
        try:
            # Example 1: Inspect a signed request without sending it
            print("2. Preparing a signed request...")
            request = client.prepare("GET", "ping")
            print(f"   URL: {request.url}\n")

            # Example 2: GET
            print("3. GET /ping...")
            payload = client.get("/ping")
            print(f"   ✓ Response: {json.dumps(payload, indent=2)}\n")

            # Example 3: POST with a body, wrapped as {"request": ...}
            print("4. POST /echo...")
            payload = client.post("/echo", {"message": "Hello, BORDERS!"})
            print(f"   ✓ Response: {json.dumps(payload, indent=2)}\n")

            # Example 4: PUT is reserved for file uploads
            print("5. PUT /files...")
            try:
                client.put("/files", {"name": "report.pdf"})
            except UploadNotSupportedError as e:
                print(f"   - {e}\n")

        except BordersAPIError as e:
            print(f"   ✗ Request failed: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
