from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .body import json_body_middleware
from .config import get_settings
from .static import StaticRootsMiddleware
from .utils import greeting

VERSION = "1.0.0"


async def not_found(request: Request, exc: Exception) -> JSONResponse:
    # A path that exists for another method is still unmatched here.
    return JSONResponse({"detail": "Not Found"}, status_code=404)


def create_app(
    static_dirs: Optional[Iterable[Path]] = None,
    json_body_limit: Optional[int] = None,
) -> FastAPI:
    settings = get_settings()
    if static_dirs is None:
        static_dirs = settings.static_dirs
    if json_body_limit is None:
        json_body_limit = settings.json_body_limit

    app = FastAPI(
        title="Greeter",
        version=VERSION,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_exception_handler(405, not_found)
    # Added first so it sits inside the body parser and ahead of the routes.
    app.add_middleware(StaticRootsMiddleware, directories=list(static_dirs))
    app.middleware("http")(json_body_middleware(json_body_limit))

    @app.api_route("/hello", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    def hello(
        first_name: Optional[List[str]] = Query(None, alias="firstName"),
        last_name: Optional[List[str]] = Query(None, alias="lastName"),
    ) -> str:
        return greeting(first_name, last_name)

    return app


app = create_app()
