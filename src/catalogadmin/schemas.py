from __future__ import annotations

from pydantic import BaseModel


class AdminCreate(BaseModel):
    username: str | None = None
    password: str | None = None
    email: str | None = None


class AdminUpdate(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class AdminDelete(BaseModel):
    username: str | None = None


class PlatformDelete(BaseModel):
    platform_id: int | None = None


class CategoryDelete(BaseModel):
    cat_id: int | None = None
