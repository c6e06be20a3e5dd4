"""Request building for the Bot API.

A request is described by an immutable :class:`ApiRequest` which the
client executes exactly once. Building never touches the network; every
validation failure is logged and reported as ``None``.
"""

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST")

NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)

Body = Union[str, bytes, Mapping]


@dataclass(frozen=True)
class ApiRequest:
    url: str
    method: str
    params: dict
    body: Optional[Body] = None
    headers: Optional[dict] = None


def is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float, str)) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    """True for finite numbers and plain decimal strings, False for booleans.

    ``"nan"``, ``"inf"`` and underscore separators are not numeric.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(NUMERIC_RE.match(value)) and math.isfinite(float(value))
    return False


def encode_parameters(parameters: Mapping) -> dict:
    """JSON-encode every value that is not a plain number or string.

    Raises ``ValueError`` naming the offending key.
    """
    encoded = {}
    for key, value in parameters.items():
        if is_scalar(value):
            encoded[key] = value
            continue
        try:
            encoded[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise ValueError(key) from e
    return encoded


def prepare_parameters(parameters: Optional[Mapping], defaults: Mapping) -> Any:
    """Merge caller parameters with defaults; caller values win."""
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, Mapping):
        # Left for prepare_request to reject.
        return parameters
    merged = dict(parameters)
    for key, value in defaults.items():
        merged.setdefault(key, value)
    return merged


def prepare_request(url: str, method: str, parameters: Optional[Mapping] = None,
                    body: Optional[Body] = None,
                    headers: Optional[Mapping] = None) -> Optional[ApiRequest]:
    if not isinstance(url, str) or not url:
        logger.error("URL must be a non-empty string")
        return None
    if method not in METHODS:
        logger.error("Method must be either GET or POST, got %r", method)
        return None
    if method != "POST" and body:
        logger.error("Cannot send request body content without POST method")
        return None
    if parameters is None:
        parameters = {}
    if not isinstance(parameters, Mapping):
        logger.error("Parameters must be a mapping of values, got %s",
                     type(parameters).__name__)
        return None
    if headers is not None and not isinstance(headers, Mapping):
        logger.error("Headers must be a mapping of names to values, got %s",
                     type(headers).__name__)
        return None

    try:
        params = encode_parameters(parameters)
    except ValueError as e:
        logger.error("Parameter %s cannot be JSON-encoded", e)
        return None

    query_string = urlencode(params)
    if query_string:
        url = f"{url}?{query_string}"

    logger.info("HTTP request to %s", url)

    return ApiRequest(
        url=url,
        method=method,
        params=params,
        body=body if method == "POST" and body else None,
        headers=dict(headers) if headers is not None else None,
    )
