from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..listing import filter_records, paginate
from ..models import CATEGORY_TYPES
from ..repository import admin_to_dict, category_to_dict, list_admins, list_categories, list_platforms, platform_to_dict
from ..ui import templates


router = APIRouter(prefix="/cpanel/admin", tags=["console"])


@router.get("")
def admins_page(request: Request, q: str = "", page: int = 1, db: Session = Depends(get_db)):
    admins = [admin_to_dict(admin) for admin in list_admins(db)]
    matched = filter_records(admins, q, ("username", "email"))
    return templates.TemplateResponse(
        request,
        "admins.html",
        {
            "page": paginate(matched, page, settings.admin_page_size),
            "q": q,
        },
    )


@router.get("/platforms")
def platforms_page(request: Request, q: str = "", page: int = 1, db: Session = Depends(get_db)):
    platforms = [platform_to_dict(platform) for platform in list_platforms(db)]
    matched = filter_records(platforms, q, ("platform_name", "description"))
    return templates.TemplateResponse(
        request,
        "platforms.html",
        {
            "page": paginate(matched, page, settings.catalog_page_size),
            "q": q,
        },
    )


@router.get("/categories")
def categories_page(
    request: Request,
    q: str = "",
    category_type: str = Query(default="", alias="type"),
    platform: str = "",
    page: int = 1,
    db: Session = Depends(get_db),
):
    platform_id = int(platform) if platform.isdigit() else None
    platforms = [platform_to_dict(item) for item in list_platforms(db)]
    categories = [category_to_dict(category) for category in list_categories(db)]
    matched = filter_records(
        categories,
        q,
        ("cat_name", "cat_description"),
        type=category_type,
        platform_id=platform_id,
    )
    return templates.TemplateResponse(
        request,
        "categories.html",
        {
            "page": paginate(matched, page, settings.catalog_page_size),
            "q": q,
            "selected_type": category_type,
            "selected_platform": platform_id,
            "types": CATEGORY_TYPES,
            "platforms": platforms,
            "platform_names": {item["platform_id"]: item["platform_name"] for item in platforms},
        },
    )


home_router = APIRouter()


@home_router.get("/")
def home():
    return RedirectResponse(url="/cpanel/admin", status_code=303)
