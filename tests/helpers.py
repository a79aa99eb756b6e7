from __future__ import annotations

from pathlib import Path


def create_platform(client, name: str, files: dict | None = None, **fields) -> dict:
    response = client.post("/api/platform", data={"platform_name": name, **fields}, files=files)
    assert response.status_code == 201, response.text
    return response.json()["platform"]


def create_category(
    client,
    platform_id: int,
    name: str,
    category_type: str = "App",
    files: dict | None = None,
    **fields,
) -> dict:
    data = {"platform_id": str(platform_id), "type": category_type, "cat_name": name, **fields}
    response = client.post("/api/category", data=data, files=files)
    assert response.status_code == 201, response.text
    return response.json()["category"]


def stored_files(public_dir: Path, *parts: str) -> list[Path]:
    directory = public_dir.joinpath("uploads", *parts)
    if not directory.is_dir():
        return []
    return sorted(path for path in directory.iterdir() if path.is_file())
