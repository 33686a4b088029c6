"""Router with error mapping, response handling and upload endpoint registry."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

import orjson
from pydantic import BaseModel
from robyn import Request, Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from app.core.exceptions import HTTPError
from app.core.logger import LogIcon, logger
from app.models.core import ErrorResponse
from app.services.uploads import UploadField

Handler = Callable[[Request], Awaitable[Any]]

FILE_UPLOAD_ENDPOINTS: dict[str, UploadField] = {}

JSON_HEADERS = {"content-type": "application/json"}


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers=dict(JSON_HEADERS),
                description=result.model_dump_json(),
            )
        case dict() | list():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers=dict(JSON_HEADERS),
                description=orjson.dumps(result).decode(),
            )
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={},
                description=str(result),
            )


def error_response(ex: HTTPError) -> Response:
    """Render an HTTPError as a JSON error body with its status code."""
    payload = ErrorResponse(status_code=ex.status_code, error=ex.error, message=ex.message)
    return Response(
        status_code=ex.status_code,
        headers=dict(JSON_HEADERS),
        description=payload.model_dump_json(),
    )


async def handle_request(handler: Handler, request: Request) -> Response:
    """Run a handler and map its result or its HTTPError to a Response."""
    try:
        result = await handler(request)
    except HTTPError as ex:
        logger.warning(
            "Request rejected",
            icon=LogIcon.FORBIDDEN,
            path=getattr(getattr(request, "url", None), "path", None),
            status_code=ex.status_code,
            error=ex.error,
        )
        return error_response(ex)
    return parse_response(result)


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
    HttpMethod.CONNECT,
)


def _create_method_wrapper(original_method: Callable, router_prefix: str = "") -> Callable:
    @wraps(original_method)
    def method_wrapper(endpoint: str, *args, upload: UploadField | None = None, **kwargs) -> Callable:
        decorator = original_method(endpoint, *args, **kwargs)

        def handler_decorator(handler: Handler) -> Handler:
            if upload is not None:
                full_path = f"{router_prefix}{endpoint}".replace("//", "/")
                FILE_UPLOAD_ENDPOINTS[full_path] = upload

            @wraps(handler)
            async def wrapped_handler(request: Request) -> Response:
                return await handle_request(handler, request)

            decorator(wrapped_handler)
            # Keep the plain handler bound at module level so it stays callable.
            return handler

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """SubRouter whose handlers take the request and parse it explicitly."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._prefix = kwargs.get("prefix", "")
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with response and error handling."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                wrapped_method = _create_method_wrapper(original_method, self._prefix)
                setattr(self, method_name, wrapped_method)
