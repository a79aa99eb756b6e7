from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..repository import create_software, get_category, get_platform, list_software, software_to_dict
from ..storage import upload_dir
from ..utils import bad_request, clean_text, discard_on_failure, not_found, save_media


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["software"])


@router.get("/software")
def get_software(db: Session = Depends(get_db)):
    return {"software": [software_to_dict(item) for item in list_software(db)]}


@router.post("/software", status_code=201)
async def upload_software(
    upload_date: date | None = Form(default=None),
    platform_id: int | None = Form(default=None),
    cat_id: int | None = Form(default=None),
    package_name: str = Form(default=""),
    name: str = Form(default=""),
    description: str = Form(default=""),
    vendor: str = Form(default=""),
    version: str = Form(default=""),
    release_date: date | None = Form(default=None),
    upload: UploadFile | None = File(default=None),
    thumbnail: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    text_fields = {
        "package_name": clean_text(package_name),
        "name": clean_text(name),
        "description": clean_text(description),
        "vendor": clean_text(vendor),
        "version": clean_text(version),
    }
    files_missing = not (upload and upload.filename) or not (thumbnail and thumbnail.filename)
    if not all(text_fields.values()) or not (upload_date and release_date and platform_id and cat_id) or files_missing:
        raise bad_request("Missing required fields")

    category = get_category(db, cat_id)
    if not category:
        raise not_found("Category not found")
    if not get_platform(db, platform_id):
        raise not_found("Platform not found")

    saved = await save_media(
        {
            "path": (upload, upload_dir(category.cat_name)),
            "thumb_link": (thumbnail, upload_dir(category.cat_name, "soft_thumbs")),
        }
    )
    with discard_on_failure(saved):
        software = create_software(
            db,
            upload_date=upload_date,
            platform_id=platform_id,
            cat_id=cat_id,
            release_date=release_date,
            **saved,
            **text_fields,
        )

    logger.info("Created software %s (%s %s)", software.upload_id, software.name, software.version)
    return {"message": "Data inserted successfully", "software": software_to_dict(software)}
