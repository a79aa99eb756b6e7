from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fastapi import HTTPException, UploadFile

from .storage import delete_many, save_upload


def clean_text(value: str | None) -> str:
    return (value or "").strip()


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=400, detail=message)


def not_found(message: str) -> HTTPException:
    return HTTPException(status_code=404, detail=message)


async def save_media(files: dict[str, tuple[UploadFile | None, Path]]) -> dict[str, str]:
    """Save each supplied upload; fields without a file are left out of the result."""
    saved: dict[str, str] = {}
    with discard_on_failure(saved):
        for field, (upload, directory) in files.items():
            url = await save_upload(upload, directory)
            if url:
                saved[field] = url
    return saved


@contextmanager
def discard_on_failure(saved: dict[str, str]) -> Iterator[None]:
    # Files written for a request whose row never landed are removed again.
    try:
        yield
    except Exception:
        delete_many(saved.values())
        raise
