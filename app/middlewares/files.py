"""File upload middleware for OpenAPI multipart/form-data patching."""

import orjson
from robyn import Response

from app.core.logger import LogIcon, logger
from app.core.router import FILE_UPLOAD_ENDPOINTS
from app.middlewares.base import BaseMiddleware
from app.services.uploads import UploadField


def multipart_schema(upload: UploadField) -> dict:
    """Request body schema for an upload field plus the free-form body fields."""
    binary = {"type": "string", "format": "binary"}
    if upload.max_count > 1:
        file_schema = {
            "type": "array",
            "items": binary,
            "maxItems": upload.max_count,
            "description": f"Up to {upload.max_count} files",
        }
    else:
        file_schema = {**binary, "description": "File to upload"}

    return {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        upload.name: file_schema,
                    },
                    "additionalProperties": True,
                }
            }
        },
        "required": True,
    }


class FileUploadOpenAPIMiddleware(BaseMiddleware):
    """Patches OpenAPI responses to use multipart/form-data for file upload endpoints."""

    endpoints = frozenset(["/openapi.json"])

    def after(self, response: Response) -> Response:
        """Patch OpenAPI spec with multipart/form-data for file upload endpoints."""
        if not FILE_UPLOAD_ENDPOINTS:
            return response

        try:
            spec = orjson.loads(response.description)
        except orjson.JSONDecodeError as ex:
            logger.warning("OpenAPI document is not valid JSON, left unpatched", icon=LogIcon.WARNING, error=str(ex))
            return response

        paths = spec.get("paths", {})
        for endpoint, upload in FILE_UPLOAD_ENDPOINTS.items():
            for operation in paths.get(endpoint, {}).values():
                operation["requestBody"] = multipart_schema(upload)

        response.description = orjson.dumps(spec).decode()
        return response
