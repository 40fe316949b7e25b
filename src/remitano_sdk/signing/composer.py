"""
API-Auth request composer

This module builds fully authenticated requests for the Remitano API: fixed
headers, the Content-MD5 body digest, the Date header, the canonical request
string and the ``APIAuth`` Authorization header.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from ..version import __version__
from .digest import canonical_json, content_digest, sign
from .types import (
    AUTH_SCHEME,
    JSON_CONTENT_TYPE,
    Credentials,
    DateGenerator,
    HeaderDict,
    HttpMethod,
    QueryParams,
    SignableValue,
    SignedRequest,
)
from .utils import build_request_path, format_http_date, validate_header_value

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"Remitano-Python-SDK/{__version__}"


def build_canonical_string(method: str, content_md5: str, path: str, date: str) -> str:
    """
    Build the canonical request string that gets signed.
    
    Args:
        method: HTTP method (uppercased here)
        content_md5: Value of the Content-MD5 header
        path: Request path relative to the origin, e.g. ``api/v1/users/1``
        date: Value of the Date header
        
    Returns:
        str: ``METHOD,application/json,<md5>,/<path>,<date>``
    """
    return ",".join([
        method.upper(),
        JSON_CONTENT_TYPE,
        content_md5,
        f"/{path}",
        date,
    ])


def _method_name(method: Union[HttpMethod, str]) -> str:
    if isinstance(method, HttpMethod):
        return method.value
    return str(method).upper()


class RequestComposer:
    """
    Composes signed requests for a single set of credentials.
    
    The composer holds no per-request state and can be shared between
    threads and tasks.
    """
    
    def __init__(
        self,
        credentials: Credentials,
        api_url: str,
        date_generator: Optional[DateGenerator] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize the composer.
        
        Args:
            credentials: Key and secret used for signing
            api_url: API origin without trailing slash
            date_generator: Optional clock returning the request datetime
            user_agent: Value of the User-Agent header
        """
        self.credentials = credentials
        self.api_url = api_url.rstrip("/")
        self.date_generator = date_generator
        self.user_agent = user_agent
    
    def authorization_header(self, canonical_string: str) -> str:
        """Sign a canonical string and format the Authorization header value."""
        signature = sign(canonical_string, self.credentials.secret)
        return f"{AUTH_SCHEME} {self.credentials.key}:{signature}"
    
    def compose(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        params: Optional[QueryParams] = None,
        body: SignableValue = None,
        date: Optional[datetime] = None,
    ) -> SignedRequest:
        """
        Build a fully authenticated request.
        
        Args:
            method: HTTP method
            endpoint: Endpoint path below ``api/v1/``
            params: Optional query parameters
            body: Optional JSON body
            date: Request time (defaults to the generator or now)
            
        Returns:
            SignedRequest: Request with all headers and the serialized body
            
        Raises:
            SerializationError: If the body or params cannot be serialized
            HeaderValueError: If a computed header value is illegal
            CryptoInitError: If the secret cannot initialize the MAC
        """
        method_name = _method_name(method)
        
        headers: HeaderDict = {
            "User-Agent": self.user_agent,
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
        }
        headers["Content-MD5"] = content_digest(body)
        
        if date is None and self.date_generator is not None:
            date = self.date_generator()
        headers["Date"] = format_http_date(date)
        
        path = build_request_path(endpoint, params)
        canonical_string = build_canonical_string(
            method_name, headers["Content-MD5"], path, headers["Date"]
        )
        headers["Authorization"] = self.authorization_header(canonical_string)
        
        for name, value in headers.items():
            validate_header_value(name, value)
        
        logger.debug(f"Composed signed {method_name} request for /{path}")
        
        return SignedRequest(
            method=method_name,
            url=f"{self.api_url}/{path}",
            path=path,
            headers=headers,
            body=b"" if body is None else canonical_json(body),
            canonical_string=canonical_string,
        )
