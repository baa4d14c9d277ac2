"""Reject request bodies whose declared size is over the upload cap."""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from zencloud.exceptions import UploadTooLarge


class UploadSizeLimitMiddleware(BaseHTTPMiddleware):
    """Checks Content-Length before the body is read.

    Bodies without a declared length are capped while the blob is copied.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length", "")
        if content_length.isdigit() and int(content_length) > self.max_bytes:
            return PlainTextResponse(str(UploadTooLarge(self.max_bytes)), status_code=400)
        return await call_next(request)
