"""
Exception classes for Remitano Python SDK
"""

from typing import Optional, Dict, Any


class RemitanoSDKError(Exception):
    """Base exception for all Remitano SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ConfigurationError(RemitanoSDKError):
    """Exception raised for missing or invalid client configuration"""
    
    def __init__(self, message: str, error_code: str = "INVALID_CONFIG", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SerializationError(RemitanoSDKError):
    """Exception raised when a body or query parameters cannot be serialized"""
    
    def __init__(self, message: str, error_code: str = "SERIALIZATION_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class CryptoInitError(RemitanoSDKError):
    """Exception raised when the signing key cannot initialize the MAC"""
    
    def __init__(self, message: str, error_code: str = "CRYPTO_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class HeaderValueError(RemitanoSDKError):
    """Exception raised when a computed header value is not a legal HTTP header value"""
    
    def __init__(self, message: str, error_code: str = "INVALID_HEADER_VALUE", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TransportError(RemitanoSDKError):
    """Exception raised for network, connection and timeout errors"""
    
    def __init__(self, message: str, error_code: str = "REQUEST_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class DecodeError(RemitanoSDKError):
    """Exception raised when a response body cannot be decoded into the expected type"""
    
    def __init__(self, message: str, error_code: str = "DECODE_FAILED",
                 http_status: int = 0, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
