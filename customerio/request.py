from __future__ import annotations
import asyncio
import base64
import errno
import json
import logging
from typing import Any, Awaitable, Dict, Optional, Tuple

from aiohttp import ClientError

from .config import DEFAULTS
from .exceptions import APIError, TransportError
from .http import HTTPClient

log = logging.getLogger("customerio.request")

UNKNOWN_ERROR = "Unknown error"
TIMEOUT_CODE = "ETIMEDOUT"


def _transport_error_name(exc: BaseException) -> str:
    code = getattr(exc, "errno", None)
    if code is not None and code in errno.errorcode:
        return errno.errorcode[code]
    return type(exc).__name__


def _api_error_message(body: Optional[str]) -> str:
    if not body:
        return UNKNOWN_ERROR
    try:
        data = json.loads(body)
    except ValueError:
        return UNKNOWN_ERROR
    meta = data.get("meta") if isinstance(data, dict) else None
    message = meta.get("error") if isinstance(meta, dict) else None
    if isinstance(message, str) and message:
        return message
    return UNKNOWN_ERROR


class Request:
    """Authenticated request builder for the Customer.io REST API.

    Every verb method returns the awaitable produced by :meth:`handler`; nothing
    is raised until it is awaited.
    """

    def __init__(
            self,
            site_id: Any = None,
            api_key: Optional[str] = None,
            defaults: Optional[Dict[str, Any]] = None,
            *,
            http: Optional[HTTPClient] = None,
    ):
        self.siteid = site_id
        self.apikey = api_key
        self.defaults: Dict[str, Any] = {**DEFAULTS, **(defaults or {})}
        token = base64.b64encode(f"{site_id}:{api_key}".encode("utf-8")).decode("ascii")
        self.auth = f"Basic {token}"
        self._http = http

    def options(self, uri: str, method: str) -> Dict[str, Any]:
        return {
            "uri": uri,
            "headers": {
                "Authorization": self.auth,
                "Content-Type": "application/json",
            },
            "method": method,
        }

    def get(self, uri: str, data: Optional[Dict[str, Any]] = None) -> Awaitable[Any]:
        options = self.options(uri, "GET")
        options["qs"] = data
        return self.handler(options)

    def _with_body(self, uri: str, method: str, data: Any) -> Dict[str, Any]:
        options = self.options(uri, method)
        # no data means no body, not a JSON null
        if data is not None:
            options["body"] = json.dumps(data)
        return options

    def put(self, uri: str, data: Any = None) -> Awaitable[Any]:
        return self.handler(self._with_body(uri, "PUT", data))

    def post(self, uri: str, data: Any = None) -> Awaitable[Any]:
        return self.handler(self._with_body(uri, "POST", data))

    def destroy(self, uri: str) -> Awaitable[Any]:
        return self.handler(self.options(uri, "DELETE"))

    async def handler(self, options: Dict[str, Any]) -> Any:
        options = {**self.defaults, **options}
        method, uri = options.get("method"), options.get("uri")
        log.debug("%s %s (timeout=%sms)", method, uri, options.get("timeout"))

        try:
            status, body = await self._request(options)
        except asyncio.TimeoutError as e:
            log.warning("%s %s timed out after %sms", method, uri, options.get("timeout"))
            raise TransportError(TIMEOUT_CODE) from e
        except (ClientError, OSError) as e:
            name = _transport_error_name(e)
            log.warning("%s %s failed before a response: %s", method, uri, name)
            raise TransportError(name) from e

        if 200 <= status < 300:
            if not body:
                return {}
            try:
                return json.loads(body)
            except ValueError as e:
                raise APIError("Invalid JSON response", status_code=status, body=body) from e

        message = _api_error_message(body)
        log.debug("%s %s -> %d: %s", method, uri, status, message)
        raise APIError(message, status_code=status, body=body)

    async def _request(self, options: Dict[str, Any]) -> Tuple[int, Optional[str]]:
        if self._http is not None:
            return await self._http.send(options)
        async with HTTPClient() as http:
            return await http.send(options)
