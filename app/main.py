"""upload-echo-api - file upload validation demo powered by Robyn."""

from robyn import Robyn

from app.api.files import router as files_router
from app.api.health import router as health_router
from app.api.root import router as root_router
from app.core.logger import LogIcon, logger
from app.core.router import FILE_UPLOAD_ENDPOINTS
from app.core.settings import settings as st
from app.middlewares.base import MiddlewareHandler
from app.middlewares.files import FileUploadOpenAPIMiddleware
from app.middlewares.limits import RequestSizeLimitMiddleware

app = Robyn(__file__)

# Routers
app.include_router(root_router)
app.include_router(health_router)
app.include_router(files_router)

# Middlewares
middlewares = MiddlewareHandler(app)
middlewares.register(RequestSizeLimitMiddleware(endpoints=FILE_UPLOAD_ENDPOINTS, max_bytes=st.MAX_REQUEST_BYTES))
middlewares.register(FileUploadOpenAPIMiddleware())


def main() -> None:
    logger.info("STARTING %s | HOST=%s | PORT=%s", st.API_NAME, st.API_HOST, st.API_PORT, icon=LogIcon.START)
    app.start(host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
