from __future__ import annotations

import json
from typing import Awaitable, Callable, Dict, Tuple

from fastapi import Request, Response
from fastapi.responses import JSONResponse

CallNext = Callable[[Request], Awaitable[Response]]


def parse_content_type(header: str) -> Tuple[str, Dict[str, str]]:
    media_type, _, rest = header.partition(";")
    params = {}
    for part in rest.split(";"):
        key, sep, value = part.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params


def reject_constant(name: str) -> None:
    raise ValueError(f"invalid JSON constant {name}")


def json_body_middleware(limit: int) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """Build a middleware that parses every JSON request body up front.

    Runs for all routes, static files included. The parsed value lands on
    ``request.state.json``. Only objects and arrays are accepted at the top
    level; an empty body counts as ``{}``. Bodies must be in a ``utf-*``
    charset, utf-8 when none is declared.
    """

    async def parse_json_body(request: Request, call_next: CallNext) -> Response:
        media_type, params = parse_content_type(request.headers.get("content-type", ""))
        if media_type != "application/json":
            return await call_next(request)

        charset = params.get("charset", "utf-8").lower()
        if not charset.startswith("utf-"):
            return JSONResponse({"detail": "unsupported_charset"}, status_code=415)

        length = request.headers.get("content-length", "")
        if length.isdigit() and int(length) > limit:
            return JSONResponse({"detail": "payload_too_large"}, status_code=413)

        body = await request.body()
        if len(body) > limit:
            return JSONResponse({"detail": "payload_too_large"}, status_code=413)

        try:
            text = body.decode(charset)
        except LookupError:
            return JSONResponse({"detail": "unsupported_charset"}, status_code=415)
        except UnicodeDecodeError:
            return JSONResponse({"detail": "invalid_json"}, status_code=400)

        if not text.strip():
            request.state.json = {}
            return await call_next(request)

        try:
            value = json.loads(text, parse_constant=reject_constant)
        except ValueError:
            return JSONResponse({"detail": "invalid_json"}, status_code=400)
        if not isinstance(value, (dict, list)):
            return JSONResponse({"detail": "invalid_json"}, status_code=400)

        request.state.json = value
        return await call_next(request)

    return parse_json_body
