"""
Jokebox — Upload Route Handler
===============================

What:  Handles POST /upload, a single multipart file stored by its own name.

Request Flow:
    1. Client sends multipart/form-data with a `file` part
    2. No `file` part (or a non-multipart body) → MissingFileError → 400
    3. Content is read and handed to UploadService.save()
    4. 201 Created with the stored filename
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile

from jokebox.exceptions import MissingFileError
from jokebox.schemas.joke import MessageResponse, UploadResponse
from jokebox.services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


@router.post(
    "/upload",
    status_code=201,
    response_model=UploadResponse,
    responses={
        201: {"description": "File stored", "model": UploadResponse},
        400: {"description": "No file uploaded", "model": MessageResponse},
    },
    summary="Upload a single file",
)
async def upload_file(
    file: Optional[UploadFile] = File(default=None, description="File to store"),
    uploads: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    if file is None:
        raise MissingFileError()

    try:
        content = await file.read()
        filename = await uploads.save(file.filename, content)
    finally:
        await file.close()

    return UploadResponse(filename=filename)
