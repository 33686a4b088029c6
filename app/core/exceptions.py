"""HTTP error kinds raised while parsing and validating uploads."""

from robyn import status_codes


class HTTPError(Exception):
    """Base error carrying the status code and message sent back to the client."""

    status_code: int = status_codes.HTTP_400_BAD_REQUEST
    error: str = "bad_request"
    message: str = "Bad Request"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.message
        self.status_code = status_code or self.status_code
        super().__init__(self.message)


class UnsupportedMediaTypeError(HTTPError):
    """Uploaded part rejected by a pre-parse file filter."""

    status_code = status_codes.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    error = "unsupported_media_type"
    message = "Only static image files are supported"


class FileValidationError(HTTPError):
    """Uploaded file failed a validator of the route's pipeline."""

    error = "validation_failed"
    message = "Validation failed"


class MissingRequiredFileError(HTTPError):
    error = "missing_required_file"
    message = "File is required"


class TooManyFilesError(HTTPError):
    """More file parts than the upload field accepts."""

    error = "unexpected_field"
    message = "Unexpected field"


class BodyValidationError(HTTPError):
    status_code = status_codes.HTTP_422_UNPROCESSABLE_ENTITY
    error = "invalid_body"
    message = "Invalid request body"


class PayloadTooLargeError(HTTPError):
    status_code = status_codes.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    error = "payload_too_large"
    message = "Request body exceeds the allowed size"
