from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import hash_password
from ..db import get_db
from ..models import Admin
from ..repository import admin_to_dict, create_record, delete_record, get_admin, list_admins, update_record
from ..schemas import AdminCreate, AdminDelete, AdminUpdate
from ..utils import bad_request, clean_text, not_found, optional_text


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["admin"])


@router.get("/admin")
def get_admins(db: Session = Depends(get_db)):
    return {"admins": [admin_to_dict(admin) for admin in list_admins(db)]}


@router.post("/admin", status_code=201)
def create_admin(payload: AdminCreate, db: Session = Depends(get_db)):
    username = clean_text(payload.username)
    if not username or not payload.password:
        raise bad_request("Username and password are required")

    if get_admin(db, username):
        raise bad_request("Username already exists")

    admin = create_record(
        db,
        Admin(
            username=username,
            email=optional_text(payload.email),
            password_hash=hash_password(payload.password),
        ),
        conflict_message="Username already exists",
    )
    logger.info("Created admin %s", admin.username)
    return {"message": "Admin added successfully", "admin": admin_to_dict(admin)}


@router.put("/admin")
def update_admin(payload: AdminUpdate, db: Session = Depends(get_db)):
    username = clean_text(payload.username)
    if not username:
        raise bad_request("Username is required")

    admin = get_admin(db, username)
    if not admin:
        raise not_found("Admin not found")

    fields = {}
    if "email" in payload.model_fields_set:
        fields["email"] = optional_text(payload.email)
    if payload.password:
        fields["password_hash"] = hash_password(payload.password)

    admin = update_record(db, admin, fields)
    logger.info("Updated admin %s (%s)", admin.username, ", ".join(sorted(fields)) or "no changes")
    return {"message": "Admin updated successfully", "admin": admin_to_dict(admin)}


@router.delete("/admin")
def delete_admin(payload: AdminDelete, db: Session = Depends(get_db)):
    username = clean_text(payload.username)
    if not username:
        raise bad_request("Username is required")

    admin = get_admin(db, username)
    if not admin:
        raise not_found("Admin not found")

    delete_record(db, admin)
    logger.info("Deleted admin %s", username)
    return {"message": "Admin deleted successfully"}
