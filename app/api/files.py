"""File upload endpoints echoing the body and the uploaded content."""

from robyn import Request, status_codes

from app.core.logger import LogIcon, logger
from app.core.router import Router
from app.core.settings import settings as st
from app.models.core import FileEchoResponse, ImageSummary, ImagesResponse
from app.services.uploads import UploadField, is_static_image, read_body, read_file, read_files
from app.services.validation import FilePipeline, FilePipelineBuilder

router = Router(__file__)

FILE_FIELD = UploadField(name="file")
IMAGE_FIELD = UploadField(name="image", filters=(is_static_image,))
IMAGES_FIELD = UploadField(name="images", max_count=st.IMAGES_MAX_COUNT, filters=(is_static_image,))

REQUIRED_FILE = FilePipeline(file_is_required=True)
OPTIONAL_JSON_FILE = FilePipelineBuilder().add_file_type_validator("json").build(file_is_required=False)
OPTIONAL_SMALL_IMAGE = (
    FilePipelineBuilder()
    .add_max_size_validator(st.IMAGE_MAX_SIZE)
    .build(error_http_status_code=status_codes.HTTP_422_UNPROCESSABLE_ENTITY, file_is_required=False)
)


@router.post("/file", upload=FILE_FIELD)
async def upload_file(request: Request) -> FileEchoResponse:
    body = read_body(request)
    file = REQUIRED_FILE.transform(read_file(request, FILE_FIELD))

    logger.info("File received", icon=LogIcon.FILE, original_name=file.originalname, size=file.size)
    return FileEchoResponse(body=body.model_dump(exclude_unset=True), file=file.text())


@router.post("/file/json-file", upload=FILE_FIELD)
async def upload_json_file(request: Request) -> FileEchoResponse:
    """Optional JSON file; absent file is not an error."""
    body = read_body(request)
    file = OPTIONAL_JSON_FILE.transform(read_file(request, FILE_FIELD))

    if file is not None:
        logger.info("JSON file received", icon=LogIcon.JSON, original_name=file.originalname, size=file.size)
    return FileEchoResponse(body=body.model_dump(exclude_unset=True), file=file.text() if file is not None else None)


@router.post("/file/image", upload=IMAGE_FIELD)
async def upload_image(request: Request) -> FileEchoResponse:
    """Optional static image of at most IMAGE_MAX_SIZE bytes; oversize files answer 422."""
    body = read_body(request)
    file = OPTIONAL_SMALL_IMAGE.transform(read_file(request, IMAGE_FIELD))

    if file is not None:
        logger.info("Image received", icon=LogIcon.IMAGE, original_name=file.originalname, size=file.size)
    return FileEchoResponse(body=body.model_dump(exclude_unset=True), file=file.text() if file is not None else None)


@router.post("/file/images", upload=IMAGES_FIELD)
async def upload_images(request: Request) -> ImagesResponse:
    body = read_body(request)
    images = read_files(request, IMAGES_FIELD)

    logger.info("Images received", icon=LogIcon.UPLOAD, count=len(images))
    return ImagesResponse(
        body=body.model_dump(exclude_unset=True),
        images=[ImageSummary(originalname=image.originalname, size=image.size) for image in images],
    )
