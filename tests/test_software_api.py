from __future__ import annotations

import importlib

from sqlalchemy.exc import SQLAlchemyError

from helpers import create_category, create_platform, stored_files


def _software_form(platform_id: int, cat_id: int, **overrides) -> dict:
    data = {
        "upload_date": "2024-05-01",
        "platform_id": str(platform_id),
        "cat_id": str(cat_id),
        "package_name": "com.example.racer",
        "name": "Racer",
        "description": "Arcade racing",
        "vendor": "Example Studio",
        "version": "1.2.0",
        "release_date": "2024-04-20",
    }
    data.update(overrides)
    return data


def _software_files() -> dict:
    return {
        "upload": ("racer build.apk", b"PK\x03\x04racer", "application/vnd.android.package-archive"),
        "thumbnail": ("racer.png", b"thumb", "image/png"),
    }


def _row_counts(db_mod, models) -> tuple[int, int, int]:
    db = db_mod.SessionLocal()
    try:
        return (
            db.query(models.Upload).count(),
            db.query(models.Software).count(),
            db.query(models.SoftThumb).count(),
        )
    finally:
        db.close()


def test_create_software_writes_all_rows_and_files(app_ctx, public_dir):
    client, db_mod, models = app_ctx
    platform = create_platform(client, "Android")
    category = create_category(client, platform["platform_id"], "Racing Games", category_type="Game")

    response = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], category["cat_id"]),
        files=_software_files(),
    )
    assert response.status_code == 201
    software = response.json()["software"]
    assert software["name"] == "Racer"
    assert software["release_date"] == "2024-04-20"
    assert software["upload_date"] == "2024-05-01"
    assert software["path"].startswith("/uploads/Racing_Games/racer_build_")
    assert software["thumbnail"].startswith("/uploads/Racing_Games/soft_thumbs/racer_")

    assert (public_dir / software["path"].lstrip("/")).read_bytes() == b"PK\x03\x04racer"
    assert (public_dir / software["thumbnail"].lstrip("/")).read_bytes() == b"thumb"
    assert _row_counts(db_mod, models) == (1, 1, 1)

    listed = client.get("/api/software").json()["software"]
    assert listed == [software]


def test_missing_fields_or_files_are_rejected(app_ctx, public_dir):
    client, db_mod, models = app_ctx
    platform = create_platform(client, "Android")
    category = create_category(client, platform["platform_id"], "Tools")

    no_vendor = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], category["cat_id"], vendor=""),
        files=_software_files(),
    )
    assert no_vendor.status_code == 400
    assert no_vendor.json() == {"error": "Missing required fields"}

    no_thumbnail = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], category["cat_id"]),
        files={"upload": _software_files()["upload"]},
    )
    assert no_thumbnail.status_code == 400

    bad_date = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], category["cat_id"], release_date="someday"),
        files=_software_files(),
    )
    assert bad_date.status_code == 400
    assert "release_date" in bad_date.json()["error"]

    assert stored_files(public_dir, "Tools") == []
    assert _row_counts(db_mod, models) == (0, 0, 0)


def test_unknown_category_or_platform(app_ctx):
    client, _db, _models = app_ctx
    platform = create_platform(client, "Android")
    category = create_category(client, platform["platform_id"], "Tools")

    no_category = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], 999),
        files=_software_files(),
    )
    assert no_category.status_code == 404
    assert no_category.json() == {"error": "Category not found"}

    no_platform = client.post(
        "/api/software",
        data=_software_form(999, category["cat_id"]),
        files=_software_files(),
    )
    assert no_platform.status_code == 404
    assert no_platform.json() == {"error": "Platform not found"}


def test_failed_insert_leaves_no_rows_or_files(app_ctx, public_dir, monkeypatch):
    client, db_mod, models = app_ctx
    repository = importlib.import_module("catalogadmin.repository")
    platform = create_platform(client, "Android")
    category = create_category(client, platform["platform_id"], "Tools")

    def broken_thumb(**kwargs):
        raise SQLAlchemyError("soft_thumb insert failed")

    monkeypatch.setattr(repository, "SoftThumb", broken_thumb)

    response = client.post(
        "/api/software",
        data=_software_form(platform["platform_id"], category["cat_id"]),
        files=_software_files(),
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to insert data"}
    assert _row_counts(db_mod, models) == (0, 0, 0)
    assert stored_files(public_dir, "Tools") == []
    assert stored_files(public_dir, "Tools", "soft_thumbs") == []


def test_software_route_rejects_put(app_ctx):
    client, _db, _models = app_ctx

    response = client.put("/api/software", data={})
    assert response.status_code == 405
    allowed = {method.strip() for method in response.headers["allow"].split(",")}
    assert {"GET", "POST"} <= allowed
    assert "PUT" not in allowed
