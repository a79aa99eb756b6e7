from __future__ import annotations

import logging

from fastapi import APIRouter, File, UploadFile

from ..storage import upload_dir
from ..utils import save_media


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload")
async def upload_assets(
    icon: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    thumbnail: UploadFile | None = File(default=None),
):
    saved = await save_media(
        {
            "icon": (icon, upload_dir("icons")),
            "cover": (cover, upload_dir("covers")),
            "thumbnail": (thumbnail, upload_dir("site_thumbs")),
        }
    )
    filepaths = {field: saved.get(field) for field in ("icon", "cover", "thumbnail")}
    logger.info("Stored assets: %s", filepaths)
    return {"success": True, "filepaths": filepaths}
