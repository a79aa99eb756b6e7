from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Platform
from ..repository import create_record, delete_record, get_platform, list_platforms, platform_to_dict, update_record
from ..schemas import PlatformDelete
from ..storage import delete_many, upload_dir
from ..utils import bad_request, clean_text, discard_on_failure, not_found, optional_text, save_media


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["platform"])

MEDIA_DIRS = {
    "icon": "icons",
    "cover": "covers",
    "thumbnail": "site_thumbs",
}


def media_uploads(icon: UploadFile | None, cover: UploadFile | None, thumbnail: UploadFile | None) -> dict:
    uploads = {"icon": icon, "cover": cover, "thumbnail": thumbnail}
    return {field: (uploads[field], upload_dir(dirname)) for field, dirname in MEDIA_DIRS.items()}


@router.get("/platform")
def get_platforms(db: Session = Depends(get_db)):
    return {"platforms": [platform_to_dict(platform) for platform in list_platforms(db)]}


@router.post("/platform", status_code=201)
async def create_platform(
    platform_name: str = Form(default=""),
    description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    thumbnail: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    platform_name = clean_text(platform_name)
    if not platform_name:
        raise bad_request("Platform name is required")

    saved = await save_media(media_uploads(icon, cover, thumbnail))
    with discard_on_failure(saved):
        platform = create_record(
            db,
            Platform(platform_name=platform_name, description=optional_text(description), **saved),
        )

    logger.info("Created platform %s (%s)", platform.platform_id, platform.platform_name)
    return {"message": "Platform added successfully", "platform": platform_to_dict(platform)}


@router.put("/platform")
async def update_platform(
    platform_id: int | None = Form(default=None),
    platform_name: str = Form(default=""),
    description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    thumbnail: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    if not platform_id:
        raise bad_request("Platform ID is required")

    platform_name = clean_text(platform_name)
    if not platform_name:
        raise bad_request("Platform name is required")

    platform = get_platform(db, platform_id)
    if not platform:
        raise not_found("Platform not found")

    fields = {"platform_name": platform_name}
    if description is not None:
        fields["description"] = optional_text(description)

    saved = await save_media(media_uploads(icon, cover, thumbnail))
    replaced = [getattr(platform, field) for field in saved]
    with discard_on_failure(saved):
        platform = update_record(db, platform, {**fields, **saved})

    delete_many(replaced)
    logger.info("Updated platform %s (new media: %s)", platform.platform_id, ", ".join(saved) or "none")
    return {"message": "Platform updated successfully", "platform": platform_to_dict(platform)}


@router.delete("/platform")
def delete_platform(payload: PlatformDelete, db: Session = Depends(get_db)):
    if not payload.platform_id:
        raise bad_request("Platform ID is required")

    platform = get_platform(db, payload.platform_id)
    if not platform:
        raise not_found("Platform not found")

    media = [platform.icon, platform.cover, platform.thumbnail]
    delete_record(db, platform)
    delete_many(media)

    logger.info("Deleted platform %s", payload.platform_id)
    return {"message": "Platform deleted successfully"}
