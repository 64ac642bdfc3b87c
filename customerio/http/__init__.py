from .config import HTTPOptions
from .http import HTTPClient

__all__ = ["HTTPClient", "HTTPOptions"]
