"""
Client configuration for the Remitano API

Configuration is immutable once built. ``create_config`` validates required
fields up front so a misconfigured client fails at construction time rather
than on its first request.
"""

import os
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

from .exceptions import ConfigurationError
from .signing.types import Credentials


DEFAULT_API_URL = "https://api.remitano.com"
DEFAULT_TIMEOUT_MS = 3000

# Environment variables read by ClientConfig.from_env
ENV_API_KEY = "REMITANO_API_KEY"
ENV_API_SECRET = "REMITANO_API_SECRET"
ENV_API_URL = "REMITANO_API_URL"
ENV_TIMEOUT_MS = "REMITANO_TIMEOUT_MS"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for Remitano API connection."""
    credentials: Credentials
    api_url: str = DEFAULT_API_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    
    def __post_init__(self):
        """Validate client configuration."""
        if not isinstance(self.credentials, Credentials):
            raise ConfigurationError("credentials must be a Credentials instance")
        
        if not self.api_url:
            raise ConfigurationError("API URL cannot be empty")
        
        parsed = urlparse(self.api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid API URL format: {self.api_url}",
                details={"api_url": self.api_url},
            )
        
        # Stored without trailing slash; paths are joined with "/"
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))
        
        if isinstance(self.timeout_ms, bool) or not isinstance(self.timeout_ms, int) or self.timeout_ms <= 0:
            raise ConfigurationError(
                "Timeout must be a positive number of milliseconds",
                details={"timeout_ms": self.timeout_ms},
            )
    
    @property
    def timeout_seconds(self) -> float:
        """Per-request timeout in seconds, as transports expect it."""
        return self.timeout_ms / 1000.0
    
    @staticmethod
    def from_env(
        key: Optional[str] = None,
        secret: Optional[Union[str, bytes]] = None,
        api_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> "ClientConfig":
        """
        Build configuration from ``REMITANO_*`` environment variables.
        
        Explicit arguments take precedence over the environment.
        
        Raises:
            ConfigurationError: If the key or secret is missing or a value is invalid
        """
        if timeout_ms is None:
            raw_timeout = (os.getenv(ENV_TIMEOUT_MS) or "").strip()
            timeout_ms = DEFAULT_TIMEOUT_MS
            if raw_timeout:
                try:
                    timeout_ms = int(raw_timeout)
                except ValueError as e:
                    raise ConfigurationError(
                        f"{ENV_TIMEOUT_MS} must be an integer, got {raw_timeout!r}"
                    ) from e
        
        return create_config(
            key=key or (os.getenv(ENV_API_KEY) or "").strip(),
            secret=secret or (os.getenv(ENV_API_SECRET) or "").strip(),
            api_url=api_url or (os.getenv(ENV_API_URL) or DEFAULT_API_URL).strip(),
            timeout_ms=timeout_ms,
        )


def create_config(
    key: Optional[str],
    secret: Optional[Union[str, bytes]],
    api_url: str = DEFAULT_API_URL,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> ClientConfig:
    """
    Create a validated client configuration.
    
    Args:
        key: API key identifier
        secret: API secret
        api_url: API origin (defaults to the public Remitano API)
        timeout_ms: Per-request timeout in milliseconds
        
    Returns:
        ClientConfig: Immutable configuration
        
    Raises:
        ConfigurationError: If a required field is missing or a value is invalid
    """
    if not key:
        raise ConfigurationError("Missing API key", error_code="MISSING_KEY")
    if not secret:
        raise ConfigurationError("Missing API secret", error_code="MISSING_SECRET")
    
    credentials = Credentials(key=key, secret=secret)
    
    return ClientConfig(credentials=credentials, api_url=api_url, timeout_ms=timeout_ms)
