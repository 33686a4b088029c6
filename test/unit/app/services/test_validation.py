"""Tests for the file validator pipeline."""

import pytest

from app.core.exceptions import FileValidationError, MissingRequiredFileError
from app.models.core import UploadedFilePart
from app.services.validation import (
    FilePipeline,
    FilePipelineBuilder,
    FileTypeValidator,
    FileValidator,
    MaxFileSizeValidator,
)


def make_file(name: str = "file.json", size: int = 10) -> UploadedFilePart:
    return UploadedFilePart.from_part(name, b"x" * size)


class RecordingValidator(FileValidator):
    """Validator that records calls and returns a fixed verdict."""

    def __init__(self, verdict: bool) -> None:
        self.verdict = verdict
        self.calls = 0

    @property
    def description(self) -> str:
        return "recorded"

    def is_valid(self, file: UploadedFilePart) -> bool:
        self.calls += 1
        return self.verdict


# -----------------------------------------------------------------------------
# Validator Tests
# -----------------------------------------------------------------------------


class TestFileTypeValidator:
    """Tests for FileTypeValidator."""

    def test_json_file_accepted(self) -> None:
        assert FileTypeValidator("json").validate(make_file("data.json")).accepted

    def test_non_json_file_rejected(self) -> None:
        outcome = FileTypeValidator("json").validate(make_file("data.txt"))
        assert not outcome.accepted
        assert outcome.message == "Validation failed (expected type is json)"
        assert outcome.status_code == 400

    def test_regex_file_type(self) -> None:
        validator = FileTypeValidator("image/(png|jpeg)")
        assert validator.validate(make_file("a.png")).accepted
        assert not validator.validate(make_file("a.gif")).accepted


class TestMaxFileSizeValidator:
    """Tests for MaxFileSizeValidator."""

    @pytest.mark.parametrize(("size", "accepted"), [(0, True), (999, True), (1000, True), (1001, False)])
    def test_size_boundary(self, size: int, accepted: bool) -> None:
        assert MaxFileSizeValidator(1000).validate(make_file("a.png", size)).accepted is accepted

    def test_rejection_message(self) -> None:
        outcome = MaxFileSizeValidator(1000).validate(make_file("a.png", 2000))
        assert outcome.message == "Validation failed (expected size is less than or equal to 1000)"


# -----------------------------------------------------------------------------
# FilePipeline Tests
# -----------------------------------------------------------------------------


class TestFilePipeline:
    """Tests for FilePipeline."""

    def test_absent_optional_file_accepted(self) -> None:
        pipeline = FilePipeline([FileTypeValidator("json")], file_is_required=False)
        assert pipeline.validate(None).accepted
        assert pipeline.transform(None) is None

    def test_absent_required_file_rejected(self) -> None:
        pipeline = FilePipeline(file_is_required=True)
        outcome = pipeline.validate(None)
        assert not outcome.accepted
        assert outcome.message == "File is required"
        with pytest.raises(MissingRequiredFileError) as exc_info:
            pipeline.transform(None)
        assert exc_info.value.status_code == 400

    def test_first_rejection_short_circuits(self) -> None:
        first, second = RecordingValidator(False), RecordingValidator(True)
        outcome = FilePipeline([first, second]).validate(make_file())
        assert not outcome.accepted
        assert first.calls == 1
        assert second.calls == 0

    def test_validators_run_in_order(self) -> None:
        first, second = RecordingValidator(True), RecordingValidator(True)
        assert FilePipeline([first, second]).validate(make_file()).accepted
        assert (first.calls, second.calls) == (1, 1)

    def test_custom_status_code(self) -> None:
        pipeline = FilePipeline([MaxFileSizeValidator(5)], error_http_status_code=422)
        assert pipeline.validate(make_file(size=6)).status_code == 422
        with pytest.raises(FileValidationError) as exc_info:
            pipeline.transform(make_file(size=6))
        assert exc_info.value.status_code == 422

    def test_transform_returns_accepted_file(self) -> None:
        file = make_file()
        assert FilePipeline([FileTypeValidator("json")]).transform(file) is file


class TestFilePipelineBuilder:
    """Tests for FilePipelineBuilder."""

    def test_builder_chains_validators(self) -> None:
        pipeline = (
            FilePipelineBuilder()
            .add_file_type_validator("json")
            .add_max_size_validator(100)
            .build(file_is_required=False, error_http_status_code=422)
        )
        assert [type(v) for v in pipeline.validators] == [FileTypeValidator, MaxFileSizeValidator]
        assert pipeline.file_is_required is False
        assert pipeline.error_http_status_code == 422

    def test_builder_defaults(self) -> None:
        pipeline = FilePipelineBuilder().build()
        assert pipeline.validators == ()
        assert pipeline.file_is_required is True
        assert pipeline.error_http_status_code == 400
