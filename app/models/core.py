"""Core models for request/response handling."""

import mimetypes
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

DEFAULT_MIMETYPE = "application/octet-stream"


class SampleBody(BaseModel):
    """Form fields sent alongside the file parts."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None


class UploadedFilePart(BaseModel):
    """One received file, fully buffered in memory."""

    model_config = ConfigDict(frozen=True)

    originalname: str
    buffer: bytes
    size: int
    mimetype: str = DEFAULT_MIMETYPE

    @classmethod
    def from_part(cls, filename: str, data: bytes | str) -> Self:
        buffer = data.encode() if isinstance(data, str) else bytes(data)
        mimetype, _ = mimetypes.guess_type(filename)
        return cls(originalname=filename, buffer=buffer, size=len(buffer), mimetype=mimetype or DEFAULT_MIMETYPE)

    def text(self) -> str:
        """Decode the buffer as UTF-8, replacing invalid sequences."""
        return self.buffer.decode("utf-8", errors="replace")


class ValidationOutcome(BaseModel):
    """Result of a single validation call."""

    accepted: bool
    error: str | None = None
    status_code: int | None = None
    message: str | None = None

    @classmethod
    def accept(cls) -> Self:
        return cls(accepted=True)

    @classmethod
    def reject(cls, error: str, status_code: int, message: str) -> Self:
        return cls(accepted=False, error=error, status_code=status_code, message=message)


class FileEchoResponse(BaseModel):
    """Echo of the body and, when present, the decoded file content."""

    body: dict[str, Any]
    file: str | None = None

    @model_serializer(mode="wrap")
    def _omit_absent_file(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if self.file is None:
            data.pop("file", None)
        return data


class ImageSummary(BaseModel):
    originalname: str
    size: int


class ImagesResponse(BaseModel):
    body: dict[str, Any]
    images: list[ImageSummary] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    status_code: int
    error: str
    message: str


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    version: str
