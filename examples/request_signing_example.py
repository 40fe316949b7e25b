#!/usr/bin/env python3
"""
Remitano Python SDK - Request Signing Example

This example shows how a request is signed with the API-Auth HMAC scheme,
and how to send signed requests with the synchronous and async clients.
Set REMITANO_API_KEY and REMITANO_API_SECRET to send real requests.
"""

import asyncio
import os

from remitano_sdk import (
    AsyncRemitanoClient,
    ClientConfig,
    RemitanoClient,
    RemitanoSDKError,
    content_digest,
    create_config,
    sign,
)


def digest_example():
    """Show the two digest primitives on a plain string"""
    print("=== Digest Engine ===")
    print(f"Content-MD5 of 'hash me':  {content_digest('hash me')}")
    print(f"HMAC-SHA1 of 'hash me':    {sign('hash me', 'secret')}")
    print(f"Content-MD5 of no body:    {content_digest(None)}")


def dry_run_example():
    """Compose a signed request without sending it"""
    print("\n=== Signed Request (dry run) ===")
    config = create_config(key="example-key", secret="example-secret")
    
    with RemitanoClient(config) as client:
        signed = client.prepare("GET", "offers", params={"coin_currency": "btc", "offer_type": "buy"})
    
    print(f"URL:              {signed.url}")
    print(f"Canonical string: {signed.canonical_string}")
    for name, value in signed.headers.items():
        print(f"  {name}: {value}")


async def live_example():
    """Fetch the current user with the async client"""
    print("\n=== Live Request ===")
    config = ClientConfig.from_env()
    
    async with AsyncRemitanoClient(config) as client:
        me = await client.get("users/me")
    print(f"Signed in as: {me.get('username')}")


def main():
    """Run all examples"""
    print("Remitano Python SDK - Request Signing Examples")
    print("=" * 50)
    
    digest_example()
    dry_run_example()
    
    if os.getenv("REMITANO_API_KEY") and os.getenv("REMITANO_API_SECRET"):
        try:
            asyncio.run(live_example())
        except RemitanoSDKError as e:
            print(f"Request failed ({e.error_code}): {e}")
    else:
        print("\nSet REMITANO_API_KEY and REMITANO_API_SECRET to run the live example.")


if __name__ == "__main__":
    main()
