from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


CATEGORY_TYPES = ("App", "Game")


class Base(DeclarativeBase):
    pass


class Admin(Base):
    __tablename__ = "admin"
    __table_args__ = (UniqueConstraint("username", name="uq_admin_username"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)


class Platform(Base):
    __tablename__ = "platform"

    platform_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    platform_name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cover: Mapped[str | None] = mapped_column(String(500), nullable=True)
    thumbnail: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Category(Base):
    __tablename__ = "category"

    cat_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    platform_id: Mapped[int] = mapped_column(ForeignKey("platform.platform_id"), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    cat_name: Mapped[str] = mapped_column(String(120), nullable=False)
    cat_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cat_thumb: Mapped[str | None] = mapped_column(String(500), nullable=True)
    cover: Mapped[str | None] = mapped_column(String(500), nullable=True)


class Upload(Base):
    __tablename__ = "upload"

    upload_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    upload_date: Mapped[date] = mapped_column(Date, nullable=False)
    path: Mapped[str] = mapped_column(String(500), nullable=False)


class Software(Base):
    __tablename__ = "software"

    upload_id: Mapped[int] = mapped_column(ForeignKey("upload.upload_id"), primary_key=True)
    platform_id: Mapped[int] = mapped_column(ForeignKey("platform.platform_id"), nullable=False)
    cat_id: Mapped[int] = mapped_column(ForeignKey("category.cat_id"), nullable=False)
    package_name: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False)
    version: Mapped[str] = mapped_column(String(64), nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False)

    upload: Mapped["Upload"] = relationship("Upload")
    thumbs: Mapped[list["SoftThumb"]] = relationship(
        "SoftThumb",
        back_populates="software",
        cascade="all, delete-orphan",
    )


class SoftThumb(Base):
    __tablename__ = "soft_thumb"

    thumb_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    link: Mapped[str] = mapped_column(String(500), nullable=False)
    software_id: Mapped[int] = mapped_column(ForeignKey("software.upload_id", ondelete="CASCADE"), nullable=False)

    software: Mapped["Software"] = relationship("Software", back_populates="thumbs")
