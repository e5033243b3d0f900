"""HTTP middleware enforcing the avatar size cap before the body is read."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from accounts.config import get_settings
from accounts.exceptions import UploadRejectedError

logger = logging.getLogger(__name__)

AVATAR_UPLOAD_PATH = "/users/me/avatar"

# Room for multipart boundaries and part headers around the file itself
MULTIPART_OVERHEAD = 16 * 1024


def _reject(error: UploadRejectedError, status_code: int | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code or error.status_code, content=error.to_dict())


async def upload_size_middleware(request: Request, call_next):
    """Refuse avatar uploads whose declared length exceeds the cap.

    Multipart parsing spools the whole file before the route runs, so the
    check has to happen on ``Content-Length`` here. The in-route check on the
    actual bytes still applies to requests that pass.
    """
    if request.method != "POST" or request.url.path != AVATAR_UPLOAD_PATH:
        return await call_next(request)

    content_length = request.headers.get("content-length")
    if content_length is None:
        return _reject(
            UploadRejectedError("Content-Length required"), status.HTTP_411_LENGTH_REQUIRED
        )

    try:
        declared = int(content_length)
    except ValueError:
        return _reject(UploadRejectedError("Invalid Content-Length"))

    limit = get_settings().avatar_max_bytes + MULTIPART_OVERHEAD
    if declared > limit:
        logger.info(f"Refused avatar upload of {declared} bytes before reading the body")
        return _reject(UploadRejectedError("File too large"))

    return await call_next(request)
