"""Media assets saved under the public tree.

Saved files are addressed by the relative URL returned from
:func:`save_upload` (``/uploads/<dir>/<name>``); that string is what the
records store and what :func:`delete_media` accepts back.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from fastapi import UploadFile

from .config import settings
from .errors import StorageError


logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s")
UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]")
UNDERSCORES_RE = re.compile(r"_+")
MAX_NAME_ATTEMPTS = 1000


def sanitize_filename(name: str) -> str:
    safe = WHITESPACE_RE.sub("_", name)
    safe = UNSAFE_RE.sub("", safe)
    safe = UNDERSCORES_RE.sub("_", safe)
    return safe or "file"


def timestamp_token(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    iso = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    iso = f"{iso}.{now.microsecond // 1000:03d}Z"
    return re.sub(r"[-:.]", "", iso)


def unique_filename(name: str, now: datetime | None = None) -> str:
    path = Path(name)
    return f"{path.stem}_{timestamp_token(now)}{path.suffix}"


def upload_dir(*parts: str) -> Path:
    safe_parts = [sanitize_filename(part).strip(".") or "misc" for part in parts]
    target = settings.uploads_root.joinpath(*safe_parts)
    target.mkdir(parents=True, exist_ok=True)
    return target


def relative_url(path: Path) -> str:
    return "/uploads/" + path.relative_to(settings.uploads_root).as_posix()


def write_new_file(directory: Path, name: str, data: bytes) -> Path:
    """Create ``name`` exclusively, adding ``_1``, ``_2``... while it is taken."""
    path = Path(name)
    for attempt in range(MAX_NAME_ATTEMPTS):
        candidate = name if attempt == 0 else f"{path.stem}_{attempt}{path.suffix}"
        target = directory / candidate
        try:
            with open(target, "xb") as fh:
                fh.write(data)
        except FileExistsError:
            continue
        return target
    raise FileExistsError(f"No free name for {name} in {directory}")


async def save_upload(upload: UploadFile | None, directory: Path) -> str | None:
    if upload is None or not upload.filename:
        return None

    data = await upload.read()
    target = directory / unique_filename(sanitize_filename(upload.filename))
    try:
        directory.mkdir(parents=True, exist_ok=True)
        target = write_new_file(directory, target.name, data)
    except OSError as exc:
        logger.exception("Error saving file %s", target)
        raise StorageError("Error saving files") from exc

    logger.info("Saved %s (%d bytes)", target, len(data))
    return relative_url(target)


def media_path(url: str | None) -> Path | None:
    if not url:
        return None
    root = settings.public_root.resolve()
    path = (root / url.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        logger.warning("Refusing media path outside public root: %s", url)
        return None
    return path


def delete_media(url: str | None) -> None:
    path = media_path(url)
    if path is None:
        return
    if not path.exists():
        logger.warning("File not found: %s", path)
        return
    try:
        path.unlink()
        logger.info("Deleted file: %s", path)
    except OSError:
        logger.exception("Error deleting file %s", path)


def delete_many(urls: Iterable[str | None]) -> None:
    for url in urls:
        delete_media(url)
