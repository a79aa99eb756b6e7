from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import CATEGORY_TYPES, Category
from ..repository import (
    category_to_dict,
    create_record,
    delete_record,
    get_category,
    get_platform,
    list_categories,
    update_record,
)
from ..schemas import CategoryDelete
from ..storage import delete_many, upload_dir
from ..utils import bad_request, clean_text, discard_on_failure, not_found, optional_text, save_media


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["category"])

MEDIA_DIRS = {
    "icon": "category_icons",
    "cat_thumb": "category_thumbs",
    "cover": "category_covers",
}


def media_uploads(icon: UploadFile | None, cat_thumb: UploadFile | None, cover: UploadFile | None) -> dict:
    uploads = {"icon": icon, "cat_thumb": cat_thumb, "cover": cover}
    return {field: (uploads[field], upload_dir(dirname)) for field, dirname in MEDIA_DIRS.items()}


def check_type(value: str) -> str:
    if value not in CATEGORY_TYPES:
        raise bad_request(f"Type must be one of: {', '.join(CATEGORY_TYPES)}")
    return value


@router.get("/category")
def get_categories(db: Session = Depends(get_db)):
    return {"categories": [category_to_dict(category) for category in list_categories(db)]}


@router.get("/category/id/{cat_id}")
def get_category_by_id(cat_id: int, db: Session = Depends(get_db)):
    category = get_category(db, cat_id)
    if not category:
        raise not_found("Category not found")
    return category_to_dict(category)


@router.post("/category", status_code=201)
async def create_category(
    platform_id: int | None = Form(default=None),
    category_type: str = Form(default="", alias="type"),
    cat_name: str = Form(default=""),
    cat_description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    cat_thumb: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    cat_name = clean_text(cat_name)
    if not platform_id or not cat_name:
        raise bad_request("Platform ID and category name are required")
    category_type = check_type(clean_text(category_type))

    if not get_platform(db, platform_id):
        raise not_found("Platform not found")

    saved = await save_media(media_uploads(icon, cat_thumb, cover))
    with discard_on_failure(saved):
        category = create_record(
            db,
            Category(
                platform_id=platform_id,
                type=category_type,
                cat_name=cat_name,
                cat_description=optional_text(cat_description),
                **saved,
            ),
        )

    logger.info("Created category %s (%s)", category.cat_id, category.cat_name)
    return {"message": "Category added successfully", "category": category_to_dict(category)}


@router.put("/category")
async def update_category(
    cat_id: int | None = Form(default=None),
    platform_id: int | None = Form(default=None),
    category_type: str | None = Form(default=None, alias="type"),
    cat_name: str | None = Form(default=None),
    cat_description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
    cat_thumb: UploadFile | None = File(default=None),
    cover: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
):
    if not cat_id:
        raise bad_request("Category ID is required")

    fields: dict = {}
    if cat_name is not None:
        fields["cat_name"] = clean_text(cat_name)
        if not fields["cat_name"]:
            raise bad_request("Category name is required")
    if category_type is not None:
        fields["type"] = check_type(clean_text(category_type))
    if cat_description is not None:
        fields["cat_description"] = optional_text(cat_description)

    category = get_category(db, cat_id)
    if not category:
        raise not_found("Category not found")

    if platform_id is not None:
        if not get_platform(db, platform_id):
            raise not_found("Platform not found")
        fields["platform_id"] = platform_id

    saved = await save_media(media_uploads(icon, cat_thumb, cover))
    replaced = [getattr(category, field) for field in saved]
    with discard_on_failure(saved):
        category = update_record(db, category, {**fields, **saved})

    delete_many(replaced)
    logger.info("Updated category %s (new media: %s)", category.cat_id, ", ".join(saved) or "none")
    return {"message": "Category updated successfully", "category": category_to_dict(category)}


@router.delete("/category")
def delete_category(payload: CategoryDelete, db: Session = Depends(get_db)):
    if not payload.cat_id:
        raise bad_request("Category ID is required")

    category = get_category(db, payload.cat_id)
    if not category:
        raise not_found("Category not found")

    media = [category.icon, category.cat_thumb, category.cover]
    delete_record(db, category)
    delete_many(media)

    logger.info("Deleted category %s", payload.cat_id)
    return {"message": "Category deleted successfully"}
