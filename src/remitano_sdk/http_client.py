"""
HTTP client integration for Remitano API communication

This module provides synchronous (``requests``) and asynchronous (``httpx``)
clients. Each call composes a signed request, dispatches it once and decodes
the JSON response into the caller's type. Status codes are not inspected and
nothing is retried.
"""

import dataclasses
import json
import logging
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

import httpx
import requests

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT_MS, ClientConfig, create_config
from .exceptions import DecodeError, TransportError
from .signing.composer import RequestComposer
from .signing.types import DateGenerator, HttpMethod, QueryParams, SignableValue, SignedRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")
ResponseType = Optional[Callable[..., T]]


def decode_response(content: bytes, response_type: ResponseType = None, http_status: int = 0) -> Any:
    """
    Decode a JSON response body, optionally into a typed value.
    
    Args:
        content: Raw response body
        response_type: Optional target type. Dataclasses are built from a
            JSON object via keyword arguments; any other callable is called
            with the parsed value.
        http_status: Response status, attached to errors
        
    Returns:
        The parsed JSON value, or the converted value when a type is given
        
    Raises:
        DecodeError: If the body is not JSON or does not fit the type
    """
    try:
        payload = json.loads(content)
    except ValueError as e:
        raise DecodeError(
            f"Invalid JSON response: {e}",
            http_status=http_status,
        ) from e
    
    if response_type is None:
        return payload
    
    try:
        if dataclasses.is_dataclass(response_type) and isinstance(payload, Mapping):
            return response_type(**payload)
        return response_type(payload)
    except (TypeError, ValueError, KeyError) as e:
        type_name = getattr(response_type, "__name__", repr(response_type))
        raise DecodeError(
            f"Response does not match {type_name}: {e}",
            error_code="UNEXPECTED_SHAPE",
            http_status=http_status,
        ) from e


class _BaseClient:
    """Shared configuration and request composition for both clients."""
    
    def __init__(self, config: ClientConfig, date_generator: Optional[DateGenerator] = None):
        self.config = config
        self.composer = RequestComposer(
            config.credentials,
            config.api_url,
            date_generator=date_generator,
        )
    
    def prepare(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        params: Optional[QueryParams] = None,
        body: SignableValue = None,
    ) -> SignedRequest:
        """Compose the signed request without sending it."""
        return self.composer.compose(method, endpoint, params=params, body=body)


class RemitanoClient(_BaseClient):
    """
    Synchronous HTTP client for the Remitano API.
    
    Uses a ``requests.Session`` as transport. Safe to share between threads
    as long as the session is.
    """
    
    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        date_generator: Optional[DateGenerator] = None,
    ):
        """
        Initialize the HTTP client.
        
        Args:
            config: Client configuration
            session: Optional existing requests session to send through
            date_generator: Optional clock for the Date header
        """
        super().__init__(config, date_generator)
        self.session = session or requests.Session()
        
        logger.info(f"Initialized Remitano HTTP client for: {config.api_url}")
    
    def request(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        params: Optional[QueryParams] = None,
        body: SignableValue = None,
        response_type: ResponseType = None,
    ) -> Any:
        """
        Send a signed request and decode the response.
        
        Args:
            method: HTTP method
            endpoint: Endpoint path below ``api/v1/``
            params: Optional query parameters
            body: Optional JSON body
            response_type: Optional type to decode the response into
            
        Returns:
            Decoded response body
            
        Raises:
            SerializationError: If the body or params cannot be serialized
            HeaderValueError: If a computed header is illegal
            TransportError: On network errors and timeouts
            DecodeError: If the response is not valid JSON for the type
        """
        signed = self.prepare(method, endpoint, params=params, body=body)
        
        try:
            logger.debug(f"Making {signed.method} request to {signed.url}")
            prepared = self.session.prepare_request(requests.Request(
                signed.method,
                signed.url,
                headers=signed.headers,
                data=signed.body,
            ))
            # requests requotes the URL; send exactly what was signed
            prepared.url = signed.url
            settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)
            response = self.session.send(prepared, timeout=self.config.timeout_seconds, **settings)
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"Request timeout after {self.config.timeout_ms} ms",
                error_code="TIMEOUT",
                details={"url": signed.url},
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(
                f"Connection error: {e}",
                error_code="CONNECTION_ERROR",
                details={"url": signed.url},
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", details={"url": signed.url}) from e
        
        logger.debug(f"Received HTTP {response.status_code} from {signed.url}")
        return decode_response(response.content, response_type, response.status_code)
    
    def get(self, endpoint: str, params: Optional[QueryParams] = None, response_type: ResponseType = None) -> Any:
        return self.request(HttpMethod.GET, endpoint, params=params, response_type=response_type)
    
    def post(self, endpoint: str, body: SignableValue = None, params: Optional[QueryParams] = None,
             response_type: ResponseType = None) -> Any:
        return self.request(HttpMethod.POST, endpoint, params=params, body=body, response_type=response_type)
    
    def put(self, endpoint: str, body: SignableValue = None, params: Optional[QueryParams] = None,
            response_type: ResponseType = None) -> Any:
        return self.request(HttpMethod.PUT, endpoint, params=params, body=body, response_type=response_type)
    
    def delete(self, endpoint: str, params: Optional[QueryParams] = None, response_type: ResponseType = None) -> Any:
        return self.request(HttpMethod.DELETE, endpoint, params=params, response_type=response_type)
    
    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
    
    def __enter__(self) -> "RemitanoClient":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncRemitanoClient(_BaseClient):
    """
    Asynchronous HTTP client for the Remitano API.
    
    Uses an ``httpx.AsyncClient`` as transport. Concurrent calls from
    several tasks are independent of each other.
    """
    
    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        date_generator: Optional[DateGenerator] = None,
    ):
        super().__init__(config, date_generator)
        self.http_client = http_client or httpx.AsyncClient()
        
        logger.info(f"Initialized async Remitano HTTP client for: {config.api_url}")
    
    async def request(
        self,
        method: Union[HttpMethod, str],
        endpoint: str,
        params: Optional[QueryParams] = None,
        body: SignableValue = None,
        response_type: ResponseType = None,
    ) -> Any:
        """
        Send a signed request and decode the response (async version).
        
        Raises the same errors as ``RemitanoClient.request``.
        """
        signed = self.prepare(method, endpoint, params=params, body=body)
        
        try:
            logger.debug(f"Making {signed.method} request to {signed.url}")
            response = await self.http_client.request(
                signed.method,
                signed.url,
                headers=signed.headers,
                content=signed.body,
                timeout=self.config.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timeout after {self.config.timeout_ms} ms",
                error_code="TIMEOUT",
                details={"url": signed.url},
            ) from e
        except httpx.NetworkError as e:
            raise TransportError(
                f"Connection error: {e}",
                error_code="CONNECTION_ERROR",
                details={"url": signed.url},
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", details={"url": signed.url}) from e
        
        logger.debug(f"Received HTTP {response.status_code} from {signed.url}")
        return decode_response(response.content, response_type, response.status_code)
    
    async def get(self, endpoint: str, params: Optional[QueryParams] = None, response_type: ResponseType = None) -> Any:
        return await self.request(HttpMethod.GET, endpoint, params=params, response_type=response_type)
    
    async def post(self, endpoint: str, body: SignableValue = None, params: Optional[QueryParams] = None,
                   response_type: ResponseType = None) -> Any:
        return await self.request(HttpMethod.POST, endpoint, params=params, body=body, response_type=response_type)
    
    async def put(self, endpoint: str, body: SignableValue = None, params: Optional[QueryParams] = None,
                  response_type: ResponseType = None) -> Any:
        return await self.request(HttpMethod.PUT, endpoint, params=params, body=body, response_type=response_type)
    
    async def delete(self, endpoint: str, params: Optional[QueryParams] = None,
                     response_type: ResponseType = None) -> Any:
        return await self.request(HttpMethod.DELETE, endpoint, params=params, response_type=response_type)
    
    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self.http_client.aclose()
    
    async def __aenter__(self) -> "AsyncRemitanoClient":
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def create_client(
    key: str,
    secret: Union[str, bytes],
    api_url: str = DEFAULT_API_URL,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> RemitanoClient:
    """
    Create a synchronous client from credentials.
    
    Args:
        key: API key identifier
        secret: API secret
        api_url: API origin
        timeout_ms: Per-request timeout in milliseconds
        
    Returns:
        RemitanoClient: Configured client
    """
    return RemitanoClient(create_config(key, secret, api_url=api_url, timeout_ms=timeout_ms))


def create_async_client(
    key: str,
    secret: Union[str, bytes],
    api_url: str = DEFAULT_API_URL,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> AsyncRemitanoClient:
    """Create an asynchronous client from credentials."""
    return AsyncRemitanoClient(create_config(key, secret, api_url=api_url, timeout_ms=timeout_ms))
