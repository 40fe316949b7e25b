"""
Utility functions for request signing

This module provides HTTP date formatting, query string encoding, request
path construction and header value validation.
"""

import math
import re
from datetime import datetime, timezone
from email.utils import formatdate
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from ..exceptions import HeaderValueError, SerializationError
from .types import API_PATH_PREFIX, QueryParams


# Control characters other than horizontal tab are illegal in header values
_ILLEGAL_HEADER_CHARS = re.compile(r'[\x00-\x08\x0a-\x1f\x7f]')


def format_http_date(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as an HTTP date (IMF-fixdate).
    
    Args:
        moment: Datetime to format (uses current time if None). Naive
            datetimes are taken to be UTC.
        
    Returns:
        str: Date such as ``Tue, 15 Nov 1994 08:12:31 GMT``
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    
    return formatdate(moment.timestamp(), usegmt=True)


def _encode_component(text: str) -> str:
    # alphanumerics and "*-._" pass through, space becomes "+"
    return quote_plus(text, safe="*").replace("~", "%7E")


def _scalar_to_text(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise SerializationError(
                f"Query parameter '{key}' is not a finite number",
                details={"key": key},
            )
        return repr(value)
    if isinstance(value, str):
        return value
    
    raise SerializationError(
        f"Unsupported query parameter type for '{key}': {type(value).__name__}",
        details={"key": key, "value_type": type(value).__name__},
    )


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        for sub_key in _sorted_keys(value, prefix):
            _flatten(f"{prefix}[{_encode_component(sub_key)}]", value[sub_key], pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _encode_component(_scalar_to_text(prefix, value))))


def _sorted_keys(mapping: Mapping, prefix: str = "") -> List[str]:
    for key in mapping:
        if not isinstance(key, str):
            raise SerializationError(
                f"Query parameter keys must be strings, got {type(key).__name__}",
                details={"prefix": prefix, "key": repr(key)},
            )
    return sorted(mapping)


def encode_query_params(params: QueryParams) -> str:
    """
    Encode query parameters using the bracketed nested convention.
    
    Keys are emitted in sorted order. Nested mappings become ``a[b]=v`` and
    sequences become ``a[0]=v``.
    
    Args:
        params: Mapping of parameter names to scalars, mappings or lists
        
    Returns:
        str: Query string without the leading ``?``
        
    Raises:
        SerializationError: If the parameters have an unsupported shape
    """
    if not isinstance(params, Mapping):
        raise SerializationError(
            f"Query parameters must be a mapping, got {type(params).__name__}",
            details={"params_type": type(params).__name__},
        )
    
    pairs: List[Tuple[str, str]] = []
    for key in _sorted_keys(params):
        _flatten(_encode_component(key), params[key], pairs)
    
    return "&".join(f"{name}={value}" for name, value in pairs)


def build_request_path(endpoint: str, params: Optional[QueryParams] = None) -> str:
    """
    Build the versioned request path, relative to the API origin.
    
    Args:
        endpoint: Endpoint path such as ``users/1``
        params: Optional query parameters
        
    Returns:
        str: ``api/v1/<endpoint>`` with ``?<query>`` appended when the query is non-empty
    """
    path = API_PATH_PREFIX + endpoint.lstrip("/")
    if params is not None:
        # an empty query never reaches the wire, so it is not signed either
        query = encode_query_params(params)
        if query:
            path = f"{path}?{query}"
    return path


def validate_header_value(name: str, value: str) -> str:
    """
    Ensure a computed value is legal as an HTTP header value.
    
    Args:
        name: Header name, used in the error message
        value: Header value to check
        
    Returns:
        str: The unchanged value
        
    Raises:
        HeaderValueError: If the value contains control characters, has
            surrounding whitespace or is not latin-1 encodable
    """
    if _ILLEGAL_HEADER_CHARS.search(value) or value != value.strip():
        raise HeaderValueError(
            f"Invalid characters in value of header '{name}'",
            details={"header": name},
        )
    
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as e:
        raise HeaderValueError(
            f"Value of header '{name}' is not latin-1 encodable",
            details={"header": name},
        ) from e
    
    return value
