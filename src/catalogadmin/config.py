from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = Path(__file__).resolve().parent

load_dotenv(PROJECT_ROOT / ".env")


def _to_path(value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "Software Catalog Admin")
    host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = int(os.getenv("APP_PORT", "8080"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    database_url: str = os.getenv("DATABASE_URL", "sqlite:///data/catalog.db")
    public_root: Path = _to_path(os.getenv("PUBLIC_ROOT", "public"))
    templates_dir: Path = PACKAGE_DIR / "templates"
    static_dir: Path = PACKAGE_DIR / "static"

    admin_page_size: int = int(os.getenv("ADMIN_PAGE_SIZE", "10"))
    catalog_page_size: int = int(os.getenv("CATALOG_PAGE_SIZE", "12"))

    @property
    def uploads_root(self) -> Path:
        return self.public_root / "uploads"


settings = Settings()
