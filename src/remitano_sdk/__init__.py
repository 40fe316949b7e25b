"""
Remitano Python SDK
API-Auth HMAC request signing and API client
"""

from .version import __version__
from .exceptions import (
    RemitanoSDKError,
    ConfigurationError,
    SerializationError,
    CryptoInitError,
    HeaderValueError,
    TransportError,
    DecodeError,
)
from .config import (
    ClientConfig,
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_MS,
    create_config,
)
from .signing import (
    Credentials,
    HttpMethod,
    SignedRequest,
    RequestComposer,
    build_canonical_string,
    content_digest,
    sign,
)
from .http_client import (
    RemitanoClient,
    AsyncRemitanoClient,
    create_client,
    create_async_client,
    decode_response,
)

__all__ = [
    '__version__',
    
    # Exceptions
    'RemitanoSDKError',
    'ConfigurationError',
    'SerializationError',
    'CryptoInitError',
    'HeaderValueError',
    'TransportError',
    'DecodeError',
    
    # Configuration
    'ClientConfig',
    'DEFAULT_API_URL',
    'DEFAULT_TIMEOUT_MS',
    'create_config',
    
    # Signing
    'Credentials',
    'HttpMethod',
    'SignedRequest',
    'RequestComposer',
    'build_canonical_string',
    'content_digest',
    'sign',
    
    # HTTP clients
    'RemitanoClient',
    'AsyncRemitanoClient',
    'create_client',
    'create_async_client',
    'decode_response',
]
