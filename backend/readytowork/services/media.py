"""
Media uploads (profile pictures, resumes).

Files are written under MEDIA_ROOT and served from ``/media/<filename>``.
"""

import logging
import os
import re
import uuid
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from readytowork.core.config import settings
from readytowork.core.errors import ActionResult, ErrorCode, error_message, not_authenticated
from readytowork.models import Media
from readytowork.schemas import MediaOut
from readytowork.services.session import Principal

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
UPLOAD_CHUNK_BYTES = 1024 * 1024

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/gif",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(name: Optional[str]) -> str:
    """Strip any path and reduce the name to a filesystem-safe form."""
    base = os.path.basename(name or "").strip()
    base = UNSAFE_FILENAME_CHARS.sub("_", base).strip("._")
    return base or "upload"


def media_url(media: Media) -> str:
    return f"/media/{media.filename}"


def serialize_media(media: Media) -> MediaOut:
    return MediaOut(
        id=media.id,
        alt=media.alt,
        filename=media.filename,
        mime_type=media.mime_type,
        filesize=media.filesize,
        url=media_url(media),
    )


async def _read_limited(upload: UploadFile, limit: int) -> Optional[bytes]:
    """Read the upload in chunks. Returns None as soon as it exceeds ``limit``."""
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await upload.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            return None
        chunks.append(chunk)
    return b"".join(chunks)


async def save_upload(
    db: Session,
    principal: Optional[Principal],
    upload: UploadFile,
    alt: str,
) -> ActionResult:
    """
    Store an uploaded file and create its media row.

    Args:
        db: Database session
        principal: Uploader; anonymous uploads are rejected
        upload: The multipart file
        alt: Required alt text

    Returns:
        ActionResult with the MediaOut on success
    """
    if principal is None:
        return not_authenticated()

    alt = (alt or "").strip()
    if not alt:
        return ActionResult.fail("Alt text is required", ErrorCode.VALIDATION_ERROR)

    if upload.content_type not in ALLOWED_MIME_TYPES:
        return ActionResult.fail(
            "Unsupported file type. Upload an image, PDF or Word document.",
            ErrorCode.VALIDATION_ERROR,
        )

    content = await _read_limited(upload, MAX_UPLOAD_BYTES)
    if content is None:
        return ActionResult.fail("File is too large (max 10MB)", ErrorCode.VALIDATION_ERROR)
    if not content:
        return ActionResult.fail("The uploaded file is empty", ErrorCode.VALIDATION_ERROR)

    filename = f"{uuid.uuid4().hex}_{safe_filename(upload.filename)}"
    path = os.path.join(settings.MEDIA_ROOT, filename)

    try:
        os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)

        media = Media(
            alt=alt,
            filename=filename,
            mime_type=upload.content_type,
            filesize=len(content),
            uploaded_by=f"{principal.collection}:{principal.id}",
        )
        db.add(media)
        db.commit()
        db.refresh(media)
    except Exception as e:
        db.rollback()
        if os.path.exists(path):
            os.unlink(path)
        logger.error("Media upload error: %s", error_message(e))
        return ActionResult.system_error("Failed to upload file. Please try again.")

    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return ActionResult.ok(serialize_media(media))
