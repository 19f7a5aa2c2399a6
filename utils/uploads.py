# utils/uploads.py
import logging
import os
import uuid
from typing import Optional

from fastapi import HTTPException, Request, UploadFile, status

import config

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}


def save_upload(upload: UploadFile) -> str:
    """
    Writes an uploaded image under UPLOAD_DIR with a random name.
    Returns the relative URL path stored in the database (e.g. /uploads/ab12.jpg).
    """
    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        ext = ".jpg"
    data = upload.file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image file is empty")

    config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{ext}"
    with open(config.UPLOAD_DIR / filename, "wb") as f:
        f.write(data)
    logger.info("Stored upload %s (%d bytes)", filename, len(data))
    return f"{config.UPLOAD_URL_PREFIX}/{filename}"


def public_url(request: Request, path: Optional[str]) -> Optional[str]:
    """Request scheme/host + stored relative path. Absolute URLs pass through."""
    if not path:
        return None
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return str(request.base_url).rstrip("/") + path


def delete_upload(path: Optional[str]) -> None:
    """Removes a file written by save_upload. Anything outside UPLOAD_DIR is ignored."""
    prefix = f"{config.UPLOAD_URL_PREFIX}/"
    if not path or not path.startswith(prefix):
        return
    filename = os.path.basename(path[len(prefix):])
    if not filename:
        return
    try:
        (config.UPLOAD_DIR / filename).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove upload %s: %s", filename, e)
