from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .errors import ConflictError, RepositoryError
from .models import Admin, Base, Category, Platform, SoftThumb, Software, Upload


logger = logging.getLogger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=Base)


def _run(db: Session, message: str, operation: Callable[[], T]) -> T:
    try:
        return operation()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(message)
        raise RepositoryError(message) from exc


def _commit(db: Session, message: str) -> None:
    _run(db, message, db.commit)


def list_admins(db: Session) -> list[Admin]:
    return _run(db, "Database query failed", lambda: db.query(Admin).order_by(Admin.id.asc()).all())


def get_admin(db: Session, username: str) -> Admin | None:
    return _run(
        db,
        "Database query failed",
        lambda: db.query(Admin).filter(Admin.username == username).first(),
    )


def list_platforms(db: Session) -> list[Platform]:
    return _run(
        db,
        "Database query failed",
        lambda: db.query(Platform).order_by(Platform.platform_id.asc()).all(),
    )


def get_platform(db: Session, platform_id: int) -> Platform | None:
    return _run(db, "Database query failed", lambda: db.get(Platform, platform_id))


def list_categories(db: Session) -> list[Category]:
    return _run(
        db,
        "Database query failed",
        lambda: db.query(Category).order_by(Category.cat_id.asc()).all(),
    )


def get_category(db: Session, cat_id: int) -> Category | None:
    return _run(db, "Database query failed", lambda: db.get(Category, cat_id))


def list_software(db: Session) -> list[Software]:
    return _run(
        db,
        "Database query failed",
        lambda: db.query(Software)
        .options(selectinload(Software.upload), selectinload(Software.thumbs))
        .order_by(Software.upload_id.asc())
        .all(),
    )


def create_record(db: Session, record: ModelT, conflict_message: str | None = None) -> ModelT:
    """Insert ``record``; a unique-key clash raises ConflictError when ``conflict_message`` is set."""
    db.add(record)
    if conflict_message is None:
        _commit(db, "Failed to insert data")
    else:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning("Insert rejected: %s", exc.orig)
            raise ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to insert data")
            raise RepositoryError("Failed to insert data") from exc
    db.refresh(record)
    return record


def update_record(db: Session, record: ModelT, fields: dict[str, Any]) -> ModelT:
    """Set only the given attributes; callers decide what counts as supplied."""
    for key, value in fields.items():
        setattr(record, key, value)
    _commit(db, "Failed to update data")
    db.refresh(record)
    return record


def delete_record(db: Session, record: Base) -> None:
    db.delete(record)
    _commit(db, "Failed to delete data")


def create_software(
    db: Session,
    *,
    upload_date: date,
    path: str,
    thumb_link: str,
    platform_id: int,
    cat_id: int,
    package_name: str,
    name: str,
    description: str,
    vendor: str,
    version: str,
    release_date: date,
) -> Software:
    """Insert the upload, software and thumbnail rows in one transaction."""

    def insert() -> Software:
        upload = Upload(upload_date=upload_date, path=path)
        db.add(upload)
        db.flush()

        software = Software(
            upload_id=upload.upload_id,
            platform_id=platform_id,
            cat_id=cat_id,
            package_name=package_name,
            name=name,
            description=description,
            vendor=vendor,
            version=version,
            release_date=release_date,
        )
        db.add(software)
        db.flush()

        db.add(SoftThumb(link=thumb_link, software_id=software.upload_id))
        db.commit()
        return software

    software = _run(db, "Failed to insert data", insert)
    db.refresh(software)
    return software


def admin_to_dict(admin: Admin) -> dict[str, Any]:
    return {"id": admin.id, "username": admin.username, "email": admin.email}


def platform_to_dict(platform: Platform) -> dict[str, Any]:
    return {
        "platform_id": platform.platform_id,
        "platform_name": platform.platform_name,
        "description": platform.description,
        "icon": platform.icon,
        "cover": platform.cover,
        "thumbnail": platform.thumbnail,
    }


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "cat_id": category.cat_id,
        "platform_id": category.platform_id,
        "type": category.type,
        "cat_name": category.cat_name,
        "cat_description": category.cat_description,
        "icon": category.icon,
        "cat_thumb": category.cat_thumb,
        "cover": category.cover,
    }


def software_to_dict(software: Software) -> dict[str, Any]:
    thumb = software.thumbs[0].link if software.thumbs else None
    return {
        "upload_id": software.upload_id,
        "platform_id": software.platform_id,
        "cat_id": software.cat_id,
        "package_name": software.package_name,
        "name": software.name,
        "description": software.description,
        "vendor": software.vendor,
        "version": software.version,
        "release_date": software.release_date.isoformat(),
        "upload_date": software.upload.upload_date.isoformat(),
        "path": software.upload.path,
        "thumbnail": thumb,
    }
