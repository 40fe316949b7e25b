"""
Body digest and request signature primitives

Both digests share one byte-extraction rule: a plain string is hashed as its
raw UTF-8 bytes, a missing value as zero bytes, and anything else as its
canonical JSON serialization.
"""

import base64
import json
from typing import Union

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import CryptoInitError, SerializationError
from .types import SignableValue


def canonical_json(value: SignableValue) -> bytes:
    """
    Serialize a value to compact, key-sorted JSON bytes.
    
    Args:
        value: JSON-compatible value
        
    Returns:
        bytes: UTF-8 encoded JSON text
        
    Raises:
        SerializationError: If the value cannot be represented as JSON
    """
    try:
        text = json.dumps(
            value,
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Value is not JSON serializable: {e}",
            details={"value_type": type(value).__name__},
        ) from e
    
    return text.encode("utf-8")


def signable_bytes(value: SignableValue) -> bytes:
    """
    Extract the bytes that are hashed for a signable value.
    
    Args:
        value: None, a plain string, or any JSON-compatible value
        
    Returns:
        bytes: Empty for None, raw UTF-8 for strings, canonical JSON otherwise
    """
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8")
    return canonical_json(value)


def _b64_digest(value: SignableValue, context) -> str:
    context.update(signable_bytes(value))
    return base64.b64encode(context.finalize()).decode("ascii")


def content_digest(value: SignableValue = None) -> str:
    """
    Calculate the base64 MD5 content digest sent as ``Content-MD5``.
    
    Args:
        value: Request body (None hashes as zero bytes)
        
    Returns:
        str: Base64-encoded 128-bit digest, padded
        
    Raises:
        SerializationError: If a structured value cannot be serialized
    """
    return _b64_digest(value, hashes.Hash(hashes.MD5()))


def sign(value: SignableValue, secret: Union[bytes, str]) -> str:
    """
    Calculate the base64 HMAC-SHA1 signature of a value.
    
    Args:
        value: Value to sign; the canonical request string in practice
        secret: HMAC key
        
    Returns:
        str: Base64-encoded 160-bit MAC, padded
        
    Raises:
        CryptoInitError: If the MAC cannot be initialized with the key
        SerializationError: If a structured value cannot be serialized
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")
    
    try:
        context = hmac.HMAC(secret, hashes.SHA1())
    except (TypeError, ValueError) as e:
        raise CryptoInitError(
            f"Failed to initialize HMAC-SHA1: {e}",
            details={"key_type": type(secret).__name__},
        ) from e
    
    return _b64_digest(value, context)
