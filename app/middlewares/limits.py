"""Transport-level bound on upload request size."""

from robyn import Request, Response

from app.core.exceptions import PayloadTooLargeError
from app.core.logger import LogIcon, logger
from app.core.router import error_response
from app.core.settings import settings as st
from app.middlewares.base import BaseMiddleware


class RequestSizeLimitMiddleware(BaseMiddleware):
    """Rejects requests whose declared Content-Length exceeds ``max_bytes`` before a handler parses any part."""

    # Upload routes are POST, which Robyn's endpoint hooks do not cover.
    global_hook = True

    def __init__(self, endpoints=None, max_bytes: int = st.MAX_REQUEST_BYTES) -> None:
        super().__init__(endpoints)
        self.max_bytes = max_bytes

    def before(self, request: Request) -> Request | Response:
        declared = request.headers.get("content-length")
        if not declared or not declared.isdigit() or int(declared) <= self.max_bytes:
            return request

        logger.warning(
            "Request body too large",
            icon=LogIcon.FORBIDDEN,
            path=request.url.path,
            content_length=declared,
            limit=self.max_bytes,
        )
        return error_response(PayloadTooLargeError(f"Request body exceeds {self.max_bytes} bytes"))
