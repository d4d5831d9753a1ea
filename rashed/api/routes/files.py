"""
File upload endpoints for the Rashed API.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, File, UploadFile, status
from starlette.concurrency import run_in_threadpool

from ...ai.client import AIClient
from ...core.dependencies import (
    get_activity_service,
    get_current_session,
    get_session_ai_client,
    get_upload_store,
)
from ...core.errors import AIConfigurationError, AIServiceError, BadRequestError, RashedError
from ...core.logging import get_logger
from ...core.services import ActivityService
from ...core.uploads import UploadStore, language_for
from ..auth.sessions import SessionData

router = APIRouter(prefix="/files", tags=["files"])
logger = get_logger("api.files")


async def _read_upload(
    file: Optional[UploadFile], store: UploadStore
) -> Tuple[str, bytes]:
    """
    Name and content of the uploaded file.

    At most one byte past the size limit is read, which is enough for the
    store to reject an oversize file.
    """
    if file is None or not file.filename:
        raise BadRequestError("No file uploaded", message="No file uploaded")
    return file.filename, await file.read(store.config.max_size + 1)


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    session: SessionData = Depends(get_current_session),
    store: UploadStore = Depends(get_upload_store),
    activities: ActivityService = Depends(get_activity_service),
) -> Dict[str, Any]:
    """Store an uploaded file and return its metadata."""
    filename, content = await _read_upload(file, store)
    info = await run_in_threadpool(
        store.store, filename, content, file.content_type if file else None
    )

    await activities.record(
        "file_uploaded",
        f'File "{filename}" was uploaded',
        metadata={"filesize": info["size"], "filetype": Path(filename).suffix},
    )
    return info


@router.get("")
async def list_files(
    session: SessionData = Depends(get_current_session),
    store: UploadStore = Depends(get_upload_store),
) -> List[Dict[str, Any]]:
    """Every stored file with its original name."""
    try:
        return await run_in_threadpool(store.list_files)
    except OSError as e:
        logger.error("Error reading upload directory", error=str(e))
        raise RashedError(str(e), message="Error retrieving files") from e


@router.post("/analyze")
async def analyze_file(
    file: Optional[UploadFile] = File(None),
    session: SessionData = Depends(get_current_session),
    store: UploadStore = Depends(get_upload_store),
    ai_client: AIClient = Depends(get_session_ai_client),
    activities: ActivityService = Depends(get_activity_service),
) -> Dict[str, Any]:
    """Store an uploaded source file and run a code review over it."""
    filename, content = await _read_upload(file, store)
    info = await run_in_threadpool(
        store.store, filename, content, file.content_type if file else None
    )
    language = language_for(filename)

    try:
        analysis = await ai_client.analyze_code(
            content.decode("utf-8", errors="replace"), language
        )
    except (AIConfigurationError, AIServiceError) as e:
        logger.error("Error analyzing file", filename=info["filename"], error=e.error)
        raise RashedError(e.error, message="Error analyzing file") from e

    await activities.record(
        "file_analyzed",
        f'File "{filename}" was analyzed',
        metadata={"language": language, "filesize": info["size"]},
    )
    return {
        "filename": filename,
        "language": language,
        "analysis": analysis.to_wire(),
    }
