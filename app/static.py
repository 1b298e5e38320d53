from __future__ import annotations

import os
import stat
from typing import Iterable, Optional, Union

from fastapi import Response
from fastapi.concurrency import run_in_threadpool
from fastapi.datastructures import URL
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

PathLike = Union[str, "os.PathLike[str]"]


class StaticRoots(StaticFiles):
    """Look up files in several directories, first match wins.

    Starlette already searches ``all_directories`` in order; we feed it our
    roots directly instead of a single ``directory`` so a missing root is
    skipped rather than failing the startup check.
    """

    def __init__(self, directories: Iterable[PathLike]) -> None:
        super().__init__(check_dir=False)
        self.all_directories = [os.fspath(d) for d in directories]

    async def find(self, scope: Scope) -> Optional[Response]:
        """Return a response for the file behind ``scope``, or ``None``.

        Directories serve their ``index.html`` and redirect to the trailing
        slash form first. Nothing else is synthesized, so a miss is left to
        the application.
        """
        path = self.get_path(scope)
        full_path, stat_result = await run_in_threadpool(self.lookup_path, path)
        if stat_result is None:
            return None
        if stat.S_ISREG(stat_result.st_mode):
            return self.file_response(full_path, stat_result, scope)
        if not stat.S_ISDIR(stat_result.st_mode):
            return None

        if not scope["path"].endswith("/"):
            url = URL(scope=scope)
            return RedirectResponse(url=url.replace(path=url.path + "/"))

        index_path = os.path.join(path, "index.html")
        full_path, stat_result = await run_in_threadpool(self.lookup_path, index_path)
        if stat_result is not None and stat.S_ISREG(stat_result.st_mode):
            return self.file_response(full_path, stat_result, scope)
        return None


class StaticRootsMiddleware:
    """Serve static files ahead of the routes.

    ``GET`` and ``HEAD`` requests that match a file are answered here; every
    other request falls through to the wrapped application.
    """

    def __init__(self, app: ASGIApp, directories: Iterable[PathLike]) -> None:
        self.app = app
        self.files = StaticRoots(directories)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] in ("GET", "HEAD"):
            response = await self.files.find(scope)
            if response is not None:
                await response(scope, receive, send)
                return
        await self.app(scope, receive, send)
