"""
Test suite for client configuration
"""

import pytest

from remitano_sdk.config import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_MS,
    ClientConfig,
    create_config,
)
from remitano_sdk.exceptions import ConfigurationError
from remitano_sdk.signing import Credentials


class TestCreateConfig:
    """Test the validating configuration factory"""
    
    def test_defaults(self):
        config = create_config(key="key", secret="secret")
        assert config.api_url == DEFAULT_API_URL == "https://api.remitano.com"
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS == 3000
        assert config.timeout_seconds == 3.0
        assert config.credentials == Credentials(key="key", secret=b"secret")
    
    def test_overrides(self):
        config = create_config(key="key", secret=b"secret", api_url="http://localhost:3000/", timeout_ms=250)
        assert config.api_url == "http://localhost:3000"
        assert config.timeout_seconds == 0.25
    
    def test_missing_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_config(key=None, secret="secret")
        assert exc_info.value.error_code == "MISSING_KEY"
    
    def test_missing_secret(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_config(key="key", secret="")
        assert exc_info.value.error_code == "MISSING_SECRET"
    
    @pytest.mark.parametrize("api_url", ["", "api.remitano.com", "ftp://api.remitano.com"])
    def test_invalid_url(self, api_url):
        with pytest.raises(ConfigurationError):
            create_config(key="key", secret="secret", api_url=api_url)
    
    @pytest.mark.parametrize("timeout_ms", [0, -5, 1.5, True])
    def test_invalid_timeout(self, timeout_ms):
        with pytest.raises(ConfigurationError, match="Timeout must be a positive"):
            create_config(key="key", secret="secret", timeout_ms=timeout_ms)
    
    def test_immutable(self):
        config = create_config(key="key", secret="secret")
        with pytest.raises(AttributeError):
            config.timeout_ms = 10
    
    def test_secret_not_in_repr(self):
        config = create_config(key="key", secret="hunter2")
        assert "hunter2" not in repr(config)
    
    def test_direct_construction_uses_sdk_errors(self):
        with pytest.raises(ConfigurationError, match="Secret cannot be empty"):
            ClientConfig(credentials=Credentials(key="key", secret=""))
        with pytest.raises(ConfigurationError, match="credentials must be"):
            ClientConfig(credentials=("key", "secret"))


class TestConfigFromEnv:
    """Test loading configuration from the environment"""
    
    def test_from_env(self, clean_env):
        clean_env.setenv("REMITANO_API_KEY", "env-key")
        clean_env.setenv("REMITANO_API_SECRET", "env-secret")
        clean_env.setenv("REMITANO_API_URL", "https://sandbox.example.com")
        clean_env.setenv("REMITANO_TIMEOUT_MS", "1500")
        
        config = ClientConfig.from_env()
        assert config.credentials.key == "env-key"
        assert config.credentials.secret == b"env-secret"
        assert config.api_url == "https://sandbox.example.com"
        assert config.timeout_ms == 1500
    
    def test_defaults_when_optional_unset(self, clean_env):
        clean_env.setenv("REMITANO_API_KEY", "env-key")
        clean_env.setenv("REMITANO_API_SECRET", "env-secret")
        
        config = ClientConfig.from_env()
        assert config.api_url == DEFAULT_API_URL
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS
    
    def test_explicit_values_win(self, clean_env):
        clean_env.setenv("REMITANO_API_KEY", "env-key")
        clean_env.setenv("REMITANO_API_SECRET", "env-secret")
        
        config = ClientConfig.from_env(key="arg-key", timeout_ms=100)
        assert config.credentials.key == "arg-key"
        assert config.credentials.secret == b"env-secret"
        assert config.timeout_ms == 100
    
    def test_missing_env(self, clean_env):
        with pytest.raises(ConfigurationError, match="Missing API key"):
            ClientConfig.from_env()
    
    def test_bad_timeout(self, clean_env):
        clean_env.setenv("REMITANO_API_KEY", "env-key")
        clean_env.setenv("REMITANO_API_SECRET", "env-secret")
        clean_env.setenv("REMITANO_TIMEOUT_MS", "soon")
        
        with pytest.raises(ConfigurationError, match="REMITANO_TIMEOUT_MS"):
            ClientConfig.from_env()
