from .config import DEFAULTS, DEFAULT_TIMEOUT_MS
from .exceptions import CustomerIOError, TransportError, APIError
from .http import HTTPClient, HTTPOptions
from .request import Request

__all__ = [
    "Request",
    "HTTPClient",
    "HTTPOptions",
    "CustomerIOError",
    "TransportError",
    "APIError",
    "DEFAULTS",
    "DEFAULT_TIMEOUT_MS",
]
