"""Explicit request parsing: form body extraction and file part filtering."""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

import orjson
from pydantic import BaseModel, ValidationError
from robyn import Request

from app.core.exceptions import BodyValidationError, TooManyFilesError, UnsupportedMediaTypeError
from app.core.logger import LogIcon, logger
from app.models.core import SampleBody, UploadedFilePart

FileFilter = Callable[[str], bool]
M = TypeVar("M", bound=BaseModel)

STATIC_IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png)$")


def is_static_image(filename: str) -> bool:
    """Accept only filenames ending in .jpg, .jpeg or .png (case-sensitive)."""
    return STATIC_IMAGE_PATTERN.search(filename) is not None


@dataclass(frozen=True, slots=True)
class UploadField:
    """File field accepted by a route: name, part limit and pre-parse filters."""

    name: str
    max_count: int = 1
    filters: Sequence[FileFilter] = field(default_factory=tuple)

    def accepts(self, filename: str) -> bool:
        return all(file_filter(filename) for file_filter in self.filters)


def read_body(request: Request, model: type[M] = SampleBody) -> M:
    """Build the body model from form fields, or from a JSON `body` field when one is sent."""
    form = dict(getattr(request, "form_data", None) or {})
    try:
        if set(form) == {"body"}:
            return model.model_validate(orjson.loads(form["body"]))
        return model.model_validate(form)
    except orjson.JSONDecodeError as ex:
        raise BodyValidationError(f"Body is not valid JSON: {ex}") from ex
    except ValidationError as ex:
        raise BodyValidationError(ex.json()) from ex


def read_files(request: Request, upload: UploadField) -> list[UploadedFilePart]:
    """Extract the file parts of a request in arrival order.

    A part beyond ``upload.max_count`` or rejected by a filter aborts the whole
    request, so no rejected part ever reaches a validator or a handler.

    Robyn exposes parts as ``filename -> bytes``: the form field name is not
    available, so every part counts towards ``upload.name``, and parts sharing
    a filename arrive as a single entry.
    """
    parts = getattr(request, "files", None) or {}
    accepted: list[UploadedFilePart] = []

    for count, (filename, data) in enumerate(parts.items(), start=1):
        if count > upload.max_count:
            raise TooManyFilesError(f"Unexpected field: at most {upload.max_count} '{upload.name}' part(s) accepted")
        if not upload.accepts(filename):
            logger.warning(
                "Upload rejected by file filter", icon=LogIcon.FORBIDDEN, field=upload.name, original_name=filename
            )
            raise UnsupportedMediaTypeError()
        accepted.append(UploadedFilePart.from_part(filename, data))

    return accepted


def read_file(request: Request, upload: UploadField) -> UploadedFilePart | None:
    files = read_files(request, upload)
    return files[0] if files else None
