"""
Media upload endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from readytowork.api.deps import get_optional_principal
from readytowork.api.responses import action_response
from readytowork.db.session import get_db
from readytowork.services import media as media_service
from readytowork.services.session import Principal

router = APIRouter()


@router.post("")
async def upload_media(
    file: UploadFile = File(...),
    alt: str = Form(""),
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db),
):
    """
    Upload a profile picture or resume.

    Returns the new media id, which the candidate profile can then reference.
    """
    result = await media_service.save_upload(db, principal, file, alt)
    return action_response(result, status.HTTP_201_CREATED)
