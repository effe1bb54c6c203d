"""Photo upload API route."""

import logging

from fastapi import APIRouter, BackgroundTasks, File, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse

from food_calorie_api.api.dependencies import AuditLoggerDep, SettingsDep, UploadServiceDep
from food_calorie_api.core.exceptions import PredictionError
from food_calorie_api.models.audit import AuditLogEntry

router = APIRouter()
logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Unable to analyse this photo right now. Please try again later."


async def read_upload(file: UploadFile, max_size: int) -> bytes:
    """Read an uploaded file, rejecting it if it exceeds max_size bytes."""
    too_large = HTTPException(
        status_code=413,
        detail=f"File exceeds maximum size of {max_size} bytes",
    )

    # Size is known from the parsed form when the client sent it
    if file.size is not None and file.size > max_size:
        raise too_large

    content = await file.read()
    if len(content) > max_size:
        raise too_large

    return content


@router.post("", response_class=HTMLResponse)
async def upload_photo(
    request: Request,
    background_tasks: BackgroundTasks,
    service: UploadServiceDep,
    audit_logger: AuditLoggerDep,
    settings: SettingsDep,
    photo: UploadFile = File(..., description="Photo of the food to identify"),
) -> HTMLResponse:
    """
    Identify the food in a photo.

    Returns one block per detected item with name, score, calories
    and recommendation, or a fixed message when nothing is detected.
    An access log record is written after the response is sent.
    """
    content = await read_upload(photo, settings.file_upload_max_size)

    logger.info(f"Incoming file upload {len(content)} bytes")

    client_address = request.client.host if request.client else None
    log_entry = AuditLogEntry.start(client_address, size=len(content))

    status_code = status.HTTP_200_OK
    try:
        text = await service.analyze(content)
        log_entry.complete(text)
    except PredictionError as e:
        logger.error(f"Prediction failed: {e.message}", extra={"details": e.details})
        log_entry.complete(f"{e.error_code}: {e.message}")
        text = ANALYSIS_FAILED_MESSAGE
        status_code = e.status_code
    except Exception as e:
        logger.exception("Photo analysis failed")
        log_entry.complete(repr(e))
        text = ANALYSIS_FAILED_MESSAGE
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    background_tasks.add_task(audit_logger.record, log_entry)

    return HTMLResponse(content=text, status_code=status_code)
