"""
Test suite for the API-Auth request composer

Covers the canonical request string, header assembly and the invariants
that tie the Content-MD5 and Date headers to the signed string.
"""

from datetime import datetime, timezone

import pytest

from remitano_sdk.exceptions import ConfigurationError, HeaderValueError, SerializationError
from remitano_sdk.signing import (
    Credentials,
    HttpMethod,
    RequestComposer,
    build_canonical_string,
    content_digest,
    sign,
)
from remitano_sdk.signing.composer import DEFAULT_USER_AGENT


@pytest.fixture
def composer(fixed_date):
    return RequestComposer(
        Credentials(key="key", secret=b"secret"),
        "https://api.example.com/",
        date_generator=lambda: fixed_date,
    )


class TestCanonicalString:
    """Test canonical request string construction"""
    
    def test_get_without_query(self):
        result = build_canonical_string("GET", "D", "api/v1/users/1", "T")
        assert result == "GET,application/json,D,/api/v1/users/1,T"
    
    def test_method_uppercased(self):
        assert build_canonical_string("post", "D", "api/v1/x", "T").startswith("POST,")
    
    def test_query_kept_verbatim(self):
        result = build_canonical_string("GET", "D", "api/v1/offers?a=1&b=x", "T")
        assert result == "GET,application/json,D,/api/v1/offers?a=1&b=x,T"


class TestRequestComposer:
    """Test composing signed requests"""
    
    def test_get_users_headers(self, composer):
        signed = composer.compose("GET", "users/1")
        
        date = "Tue, 15 Nov 1994 08:12:31 GMT"
        canonical = f"GET,application/json,{content_digest(None)},/api/v1/users/1,{date}"
        
        assert signed.method == "GET"
        assert signed.url == "https://api.example.com/api/v1/users/1"
        assert signed.path == "api/v1/users/1"
        assert signed.canonical_string == canonical
        assert signed.headers == {
            "User-Agent": DEFAULT_USER_AGENT,
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Content-MD5": content_digest(None),
            "Date": date,
            "Authorization": "APIAuth key:" + sign(canonical, b"secret"),
        }
        assert signed.body == b""
    
    def test_content_md5_and_date_embedded_in_canonical_string(self, composer):
        signed = composer.compose(HttpMethod.POST, "offers", body={"price": 100})
        
        fields = signed.canonical_string.split(",", 4)
        assert fields[0] == "POST"
        assert fields[1] == "application/json"
        assert fields[2] == signed.headers["Content-MD5"]
        assert fields[3] == "/api/v1/offers"
        assert fields[4] == signed.headers["Date"]
    
    def test_query_in_url_and_canonical_string(self, composer):
        signed = composer.compose("GET", "offers", params={"a": 1, "b": "x"})
        
        assert signed.url == "https://api.example.com/api/v1/offers?a=1&b=x"
        assert ",/api/v1/offers?a=1&b=x," in signed.canonical_string
    
    def test_body_serialized_as_canonical_json(self, composer):
        body = {"side": "buy", "amount": "0.1"}
        signed = composer.compose("POST", "orders", body=body)
        
        assert signed.body == b'{"amount":"0.1","side":"buy"}'
        assert signed.headers["Content-MD5"] == content_digest(body)
    
    def test_explicit_date_overrides_generator(self, composer):
        moment = datetime(2021, 2, 3, 4, 5, 6, tzinfo=timezone.utc)
        signed = composer.compose("GET", "users/1", date=moment)
        
        assert signed.headers["Date"] == "Wed, 03 Feb 2021 04:05:06 GMT"
        assert signed.canonical_string.endswith(",Wed, 03 Feb 2021 04:05:06 GMT")
    
    def test_deterministic_for_fixed_date(self, composer):
        first = composer.compose("GET", "users/1", params={"page": 1})
        second = composer.compose("GET", "users/1", params={"page": 1})
        assert first == second
    
    def test_lowercase_method(self, composer):
        signed = composer.compose("delete", "orders/7")
        assert signed.method == "DELETE"
        assert signed.canonical_string.startswith("DELETE,")
    
    def test_without_date_generator_uses_now(self):
        composer = RequestComposer(Credentials(key="key", secret=b"secret"), "https://api.example.com")
        signed = composer.compose("GET", "users/1")
        assert signed.headers["Date"].endswith(" GMT")
        assert signed.canonical_string.endswith(signed.headers["Date"])
    
    def test_authorization_header(self, composer):
        assert composer.authorization_header("hash me") == "APIAuth key:oSVlCBpf9BqviWbUjOm4DXEcgRo="
    
    def test_illegal_key_in_header(self, fixed_date):
        composer = RequestComposer(
            Credentials(key="bad\nkey", secret=b"secret"),
            "https://api.example.com",
            date_generator=lambda: fixed_date,
        )
        with pytest.raises(HeaderValueError):
            composer.compose("GET", "users/1")
    
    def test_bad_params_short_circuit(self, composer):
        with pytest.raises(SerializationError):
            composer.compose("GET", "offers", params={"a": object()})
    
    def test_bad_body_short_circuit(self, composer):
        with pytest.raises(SerializationError):
            composer.compose("POST", "offers", body={"a": object()})


class TestCredentials:
    """Test credential handling"""
    
    def test_str_secret_encoded(self):
        assert Credentials(key="key", secret="secret").secret == b"secret"
    
    def test_secret_hidden_from_repr(self):
        credentials = Credentials(key="key", secret=b"top-secret")
        assert "top-secret" not in repr(credentials)
        assert "key" in repr(credentials)
    
    def test_empty_values_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Credentials(key="", secret=b"secret")
        assert exc_info.value.error_code == "MISSING_KEY"
        with pytest.raises(ConfigurationError) as exc_info:
            Credentials(key="key", secret=b"")
        assert exc_info.value.error_code == "MISSING_SECRET"
    
    def test_secret_type_rejected(self):
        with pytest.raises(ConfigurationError):
            Credentials(key="key", secret=12345)
    
    def test_immutable(self):
        credentials = Credentials(key="key", secret=b"secret")
        with pytest.raises(AttributeError):
            credentials.key = "other"
