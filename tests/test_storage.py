from __future__ import annotations

import asyncio
import io
import re
from datetime import datetime, timezone

from fastapi import UploadFile


FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def make_upload(name: str, payload: bytes = b"\x89PNG-data") -> UploadFile:
    return UploadFile(file=io.BytesIO(payload), filename=name)


def test_sanitize_filename(storage_mod):
    assert storage_mod.sanitize_filename("My Icon.png") == "My_Icon.png"
    assert storage_mod.sanitize_filename("a  b!!@c.png") == "a_bc.png"
    assert storage_mod.sanitize_filename("résumé file.pdf") == "rsum_file.pdf"
    assert storage_mod.sanitize_filename("$$$") == "file"


def test_unique_filename_inserts_timestamp_before_extension(storage_mod):
    assert storage_mod.timestamp_token(FIXED_NOW) == "20240102T030405678Z"
    assert storage_mod.unique_filename("My_Icon.png", FIXED_NOW) == "My_Icon_20240102T030405678Z.png"
    assert storage_mod.unique_filename("README", FIXED_NOW) == "README_20240102T030405678Z"


def test_save_returns_relative_url_and_writes_file(storage_mod, public_dir):
    directory = storage_mod.upload_dir("icons")
    url = asyncio.run(storage_mod.save_upload(make_upload("My Icon.png"), directory))

    assert re.fullmatch(r"/uploads/icons/My_Icon_\d{8}T\d{9}Z\.png", url)
    stored = public_dir / url.lstrip("/")
    assert stored.read_bytes() == b"\x89PNG-data"

    storage_mod.delete_media(url)
    assert not stored.exists()


def test_save_without_file_returns_none(storage_mod, public_dir):
    directory = storage_mod.upload_dir("covers")
    assert asyncio.run(storage_mod.save_upload(None, directory)) is None
    assert asyncio.run(storage_mod.save_upload(make_upload(""), directory)) is None
    assert list(directory.iterdir()) == []


def test_nested_dirs_keep_full_relative_path(storage_mod):
    directory = storage_mod.upload_dir("Action Games", "soft_thumbs")
    url = asyncio.run(storage_mod.save_upload(make_upload("shot 1.jpg"), directory))
    assert url.startswith("/uploads/Action_Games/soft_thumbs/shot_1_")


def test_upload_dir_stays_inside_uploads_root(storage_mod, public_dir):
    directory = storage_mod.upload_dir("..", "../../etc")
    assert directory.resolve().is_relative_to((public_dir / "uploads").resolve())


def test_delete_is_noop_for_missing_or_empty_paths(storage_mod, public_dir):
    storage_mod.delete_media(None)
    storage_mod.delete_media("")
    storage_mod.delete_media("/uploads/icons/never_saved.png")
    storage_mod.delete_many(["/uploads/covers/gone.png", None])


def test_delete_refuses_paths_outside_public_root(storage_mod, tmp_path):
    outside = tmp_path / "keep.txt"
    outside.write_text("keep")

    storage_mod.delete_media("/../keep.txt")
    assert outside.exists()


class FrozenDatetime(datetime):
    @classmethod
    def now(cls, tz=None):
        return FIXED_NOW


def test_same_name_in_same_millisecond_gets_distinct_files(storage_mod, public_dir, monkeypatch):
    monkeypatch.setattr(storage_mod, "datetime", FrozenDatetime)
    directory = storage_mod.upload_dir("icons")

    first = asyncio.run(storage_mod.save_upload(make_upload("a.png", b"first"), directory))
    second = asyncio.run(storage_mod.save_upload(make_upload("a.png", b"second"), directory))

    assert first == "/uploads/icons/a_20240102T030405678Z.png"
    assert second == "/uploads/icons/a_20240102T030405678Z_1.png"
    assert (public_dir / first.lstrip("/")).read_bytes() == b"first"
    assert (public_dir / second.lstrip("/")).read_bytes() == b"second"


def test_rapid_saves_never_overwrite(storage_mod, public_dir):
    directory = storage_mod.upload_dir("icons")
    urls = [
        asyncio.run(storage_mod.save_upload(make_upload("a.png", str(n).encode()), directory))
        for n in range(50)
    ]

    assert len(set(urls)) == 50
    assert sorted(path.read_bytes() for path in directory.iterdir()) == sorted(str(n).encode() for n in range(50))
