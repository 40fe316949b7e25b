"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the API-Auth
HMAC request signing scheme used by the Remitano API.
"""

from typing import Any, Callable, Dict, List, Union
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..exceptions import ConfigurationError


# Fixed content type used in headers and in the canonical request string
JSON_CONTENT_TYPE = "application/json"

# Path prefix for every versioned API endpoint
API_PATH_PREFIX = "api/v1/"

# Scheme name used in the Authorization header
AUTH_SCHEME = "APIAuth"


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class Credentials:
    """
    API key pair used to sign requests
    
    Attributes:
        key: Public key identifier, sent in the Authorization header
        secret: Secret key bytes used as the HMAC key. Never logged.
    """
    key: str
    secret: bytes = field(repr=False)
    
    def __post_init__(self):
        """Validate credentials and normalize the secret to bytes"""
        if not isinstance(self.key, str) or not self.key:
            raise ConfigurationError("Key cannot be empty", error_code="MISSING_KEY")
        
        secret = self.secret
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not isinstance(secret, bytes):
            raise ConfigurationError("Secret must be str or bytes")
        if not secret:
            raise ConfigurationError("Secret cannot be empty", error_code="MISSING_SECRET")
        
        # frozen dataclass: bypass __setattr__ for normalization
        object.__setattr__(self, "secret", secret)


@dataclass(frozen=True)
class SignedRequest:
    """
    Fully authenticated request ready to hand to a transport
    
    Attributes:
        method: Uppercase HTTP method
        url: Absolute request URL
        path: Request path relative to the API origin, including query string
        headers: All request headers, Authorization included
        body: Serialized request body (empty when no body was supplied)
        canonical_string: The exact string that was signed
    """
    method: str
    url: str
    path: str
    headers: Dict[str, str]
    body: bytes
    canonical_string: str


# Type aliases for convenience
JsonValue = Union[None, str, int, float, bool, List[Any], Dict[str, Any]]
SignableValue = JsonValue
QueryParams = Dict[str, Any]
DateGenerator = Callable[[], datetime]
HeaderDict = Dict[str, str]
