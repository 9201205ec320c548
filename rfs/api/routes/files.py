"""Catch-all file routes — random file, explicit file and listing page."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, HTMLResponse, Response
from starlette.types import Receive, Scope, Send

from rfs.errors import ResponseError
from rfs.services import get_file_router
from rfs.services.file_router import FileReply, ListingReply, NoReply, Reply

logger = logging.getLogger(__name__)
router = APIRouter()

# Status codes for requests that end without a body
NO_REPLY_STATUS = {
    "favicon": 204,
    "not_found": 404,
    "empty": 503,
    "io": 500,
}


class SnapshotFileResponse(FileResponse):
    """FileResponse that logs a failed body write instead of crashing the request."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except OSError as e:
            logger.error("%s", ResponseError(f"Response for {self.path} aborted: {e}"))


def _to_response(reply: Reply) -> Response:
    if isinstance(reply, FileReply):
        return SnapshotFileResponse(
            reply.entry.location,
            media_type=reply.entry.content_type,
            stat_result=reply.stat,
        )
    if isinstance(reply, ListingReply):
        return HTMLResponse(reply.html)
    if isinstance(reply, NoReply):
        return Response(status_code=NO_REPLY_STATUS.get(reply.reason, 500))
    raise TypeError(f"Unknown reply type: {reply!r}")


def _raw_path(request: Request) -> str:
    """Request path exactly as sent, without percent-decoding."""
    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.decode("utf-8", errors="replace").split("?", 1)[0]


@router.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
@router.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
def serve(request: Request, full_path: str = ""):
    """Every non-API GET or HEAD ends up here."""
    reply = get_file_router().dispatch(_raw_path(request), request.url.query)
    return _to_response(reply)
