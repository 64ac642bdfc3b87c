import logging
import ssl
from typing import Any, Dict, List, Mapping, Optional, Tuple

import certifi
from aiohttp import ClientSession, ClientTimeout, TCPConnector
from aiohttp.resolver import AsyncResolver

from .config import HTTPOptions

log = logging.getLogger("customerio.http")


def _timeout_from_ms(ms: Optional[float]) -> Optional[ClientTimeout]:
    if ms is None:
        return None
    return ClientTimeout(total=ms / 1000)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten_query(qs: Mapping[str, Any], prefix: str = "") -> List[Tuple[str, str]]:
    """Encode a query mapping into ordered ``(key, value)`` string pairs.

    Booleans become ``true``/``false``, ``None`` values are skipped, lists
    repeat their key and nested mappings use ``parent[child]`` keys.
    """
    out: List[Tuple[str, str]] = []
    for key, value in qs.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            out += _flatten_query(value, name)
        elif isinstance(value, (list, tuple)):
            out += [(name, _query_value(v)) for v in value if v is not None]
        else:
            out.append((name, _query_value(value)))
    return out


def _decode_body(raw: bytes, charset: Optional[str]) -> str:
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


class HTTPClient:
    def __init__(
            self,
            session: Optional[ClientSession] = None,
            opts: Optional[HTTPOptions] = None,
            *,
            dns_cache_ttl: int = 300,
    ):
        self._external_session = session is not None
        self._session = session
        self._opts = opts or HTTPOptions()

        self._dns_cache_ttl = dns_cache_ttl

        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "HTTPClient":
        if self._session is None:
            connector = TCPConnector(
                resolver=AsyncResolver(),
                ttl_dns_cache=self._dns_cache_ttl,
                ssl=self._ssl_context,
            )
            self._session = ClientSession(
                timeout=_timeout_from_ms(self._opts.timeout),
                headers=self._opts.headers,
                connector=connector,
                trust_env=self._opts.trust_env,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._session and not self._external_session:
            await self._session.close()
            self._session = None

    def _ensure(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("HTTP session is not started. Use 'async with HTTPClient(...)'.")
        return self._session

    async def send(self, options: Dict[str, Any]) -> Tuple[int, str]:
        """Issue one request described by an options record.

        Recognized keys: ``uri``, ``method``, ``headers``, ``qs`` (query mapping),
        ``body`` (already serialized) and ``timeout`` (milliseconds). Returns the
        status code and the body text; undecodable bytes are replaced rather than
        raised. aiohttp errors propagate.
        """
        sess = self._ensure()
        kwargs: Dict[str, Any] = {"headers": options.get("headers")}
        if options.get("qs"):
            kwargs["params"] = _flatten_query(options["qs"])
        if options.get("body") is not None:
            kwargs["data"] = options["body"]
        timeout = _timeout_from_ms(options.get("timeout"))
        if timeout is not None:
            kwargs["timeout"] = timeout

        async with sess.request(options["method"], options["uri"], **kwargs) as resp:
            raw = await resp.read()
            log.debug("%s %s -> %d", options["method"], options["uri"], resp.status)
            return resp.status, _decode_body(raw, resp.charset)
