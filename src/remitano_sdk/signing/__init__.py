"""
Remitano Python SDK - Request Signing Module

API-Auth HMAC request signing. This module provides the content digest and
signature primitives and the composer that turns a method, endpoint, query
parameters and body into a fully authenticated request.
"""

from .types import (
    API_PATH_PREFIX,
    AUTH_SCHEME,
    JSON_CONTENT_TYPE,
    Credentials,
    HttpMethod,
    SignedRequest,
)

from .digest import (
    canonical_json,
    content_digest,
    sign,
    signable_bytes,
)

from .utils import (
    build_request_path,
    encode_query_params,
    format_http_date,
    validate_header_value,
)

from .composer import (
    DEFAULT_USER_AGENT,
    RequestComposer,
    build_canonical_string,
)

# Public API exports
__all__ = [
    # Types
    'API_PATH_PREFIX',
    'AUTH_SCHEME',
    'JSON_CONTENT_TYPE',
    'Credentials',
    'HttpMethod',
    'SignedRequest',
    
    # Digest engine
    'canonical_json',
    'content_digest',
    'sign',
    'signable_bytes',
    
    # Utilities
    'build_request_path',
    'encode_query_params',
    'format_http_date',
    'validate_header_value',
    
    # Composer
    'DEFAULT_USER_AGENT',
    'RequestComposer',
    'build_canonical_string',
]
