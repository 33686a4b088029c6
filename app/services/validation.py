"""Validator pipeline applied to uploaded files before handler logic runs."""

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

from robyn import status_codes

from app.core.exceptions import FileValidationError, HTTPError, MissingRequiredFileError
from app.core.logger import LogIcon, logger
from app.models.core import UploadedFilePart, ValidationOutcome


class FileValidator(ABC):
    """A single check over an uploaded file."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable expectation used in rejection messages."""

    @abstractmethod
    def is_valid(self, file: UploadedFilePart) -> bool: ...

    def validate(self, file: UploadedFilePart) -> ValidationOutcome:
        if self.is_valid(file):
            return ValidationOutcome.accept()
        return ValidationOutcome.reject(
            error=FileValidationError.error,
            status_code=FileValidationError.status_code,
            message=f"Validation failed ({self.description})",
        )


class FileTypeValidator(FileValidator):
    """Accepts files whose MIME type matches ``file_type`` (substring or regex)."""

    def __init__(self, file_type: str) -> None:
        self.file_type = file_type
        self._pattern = re.compile(file_type)

    @property
    def description(self) -> str:
        return f"expected type is {self.file_type}"

    def is_valid(self, file: UploadedFilePart) -> bool:
        return self._pattern.search(file.mimetype) is not None


class MaxFileSizeValidator(FileValidator):
    """Accepts files of at most ``max_size`` bytes."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size

    @property
    def description(self) -> str:
        return f"expected size is less than or equal to {self.max_size}"

    def is_valid(self, file: UploadedFilePart) -> bool:
        return file.size <= self.max_size


class FilePipeline:
    """Ordered validators plus the required flag and the status code used on rejection."""

    def __init__(
        self,
        validators: Sequence[FileValidator] = (),
        file_is_required: bool = True,
        error_http_status_code: int = status_codes.HTTP_400_BAD_REQUEST,
    ) -> None:
        self.validators = tuple(validators)
        self.file_is_required = file_is_required
        self.error_http_status_code = error_http_status_code

    def validate(self, file: UploadedFilePart | None) -> ValidationOutcome:
        if file is None:
            if not self.file_is_required:
                return ValidationOutcome.accept()
            return ValidationOutcome.reject(
                error=MissingRequiredFileError.error,
                status_code=self.error_http_status_code,
                message=MissingRequiredFileError.message,
            )

        for validator in self.validators:
            outcome = validator.validate(file)
            if not outcome.accepted:
                return outcome.model_copy(update={"status_code": self.error_http_status_code})
        return ValidationOutcome.accept()

    def transform(self, file: UploadedFilePart | None) -> UploadedFilePart | None:
        """Return the file when accepted, raise the matching HTTPError otherwise."""
        outcome = self.validate(file)
        if outcome.accepted:
            return file

        logger.warning(
            "File validation failed",
            icon=LogIcon.VALIDATION,
            original_name=file.originalname if file else None,
            reason=outcome.message,
        )
        error_cls: type[HTTPError] = (
            MissingRequiredFileError if outcome.error == MissingRequiredFileError.error else FileValidationError
        )
        raise error_cls(outcome.message, status_code=outcome.status_code)


class FilePipelineBuilder:
    """Fluent construction of a FilePipeline."""

    def __init__(self) -> None:
        self._validators: list[FileValidator] = []

    def add_file_type_validator(self, file_type: str) -> "FilePipelineBuilder":
        self._validators.append(FileTypeValidator(file_type))
        return self

    def add_max_size_validator(self, max_size: int) -> "FilePipelineBuilder":
        self._validators.append(MaxFileSizeValidator(max_size))
        return self

    def build(
        self,
        file_is_required: bool = True,
        error_http_status_code: int = status_codes.HTTP_400_BAD_REQUEST,
    ) -> FilePipeline:
        return FilePipeline(
            self._validators,
            file_is_required=file_is_required,
            error_http_status_code=error_http_status_code,
        )
