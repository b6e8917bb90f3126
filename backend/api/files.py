"""
File upload API router (S3, per-company prefix)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from api.dependencies import get_file_storage
from middleware.auth import get_current_user
from models.api.user import TokenClaims
from services.file_storage import FileStorage, build_object_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/files", tags=["files"])


@router.post("/upload")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    current_user: TokenClaims = Depends(get_current_user),
    storage: FileStorage = Depends(get_file_storage),
):
    """
    Upload one file (multipart field `file`)

    Stored under company_<companyId>/<timestamp>_<filename>.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    body = await file.read()
    key = build_object_key(current_user.company_id, file.filename)
    url = await storage.upload(key, body, file.content_type)

    logger.info(f"User {current_user.id} uploaded {file.filename} ({len(body)} bytes)")
    return {"success": True, "url": url, "name": file.filename}
