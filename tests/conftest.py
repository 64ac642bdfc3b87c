"""
Shared fixtures for the request wrapper tests.

Provides the fixture credentials used throughout the suite and an in-process
aiohttp server that echoes what it received.
"""

import asyncio
import base64
import json
import sys
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

# Project root on sys.path so the main.py entry point is importable
_PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

SITE_ID = 123
API_KEY = "abc"
URI = "https://track.customer.io/api/v1/customers/1"
DATA = {"first_name": "Bruce", "last_name": "Wayne"}
AUTH = "Basic " + base64.b64encode(f"{SITE_ID}:{API_KEY}".encode()).decode()


def base_options(**extra):
    options = {
        "uri": URI,
        "headers": {
            "Authorization": AUTH,
            "Content-Type": "application/json",
        },
    }
    options.update(extra)
    return options


async def _echo(request: web.Request) -> web.Response:
    return web.json_response({
        "method": request.method,
        "query": dict(request.query),
        "query_items": [[k, v] for k, v in request.query.items()],
        "body": await request.text(),
        "authorization": request.headers.get("Authorization"),
        "content_type": request.headers.get("Content-Type"),
    })


async def _slow(request: web.Request) -> web.Response:
    await asyncio.sleep(0.5)
    return web.json_response({})


async def _failing(request: web.Request) -> web.Response:
    return web.json_response({"meta": {"error": "email is invalid"}}, status=400)


async def _empty(request: web.Request) -> web.Response:
    return web.Response(status=200)


async def _binary_error(request: web.Request) -> web.Response:
    return web.Response(status=500, body=b"\xff\xfe\x00garbage", content_type="application/octet-stream")


async def _binary_ok(request: web.Request) -> web.Response:
    return web.Response(status=200, body=b"\xff\xfe\x00garbage", content_type="application/octet-stream")


@pytest.fixture
async def echo_server():
    app = web.Application()
    app.router.add_route("*", "/echo", _echo)
    app.router.add_route("*", "/slow", _slow)
    app.router.add_route("*", "/failing", _failing)
    app.router.add_route("*", "/empty", _empty)
    app.router.add_route("*", "/binary-error", _binary_error)
    app.router.add_route("*", "/binary-ok", _binary_ok)
    async with TestServer(app) as server:
        yield server
