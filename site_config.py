"""
Centralized CMS configuration.

Fixed settings live in SITE_CONFIG. Filesystem locations are read from the
environment on every call (after .env has been loaded once) so a running
server, the CLI and the tests can point the CMS at another website checkout.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_CODE_DIR = Path(__file__).resolve().parent

SITE_CONFIG = {
    # Dev server
    "port": 3000,
    # Uploads larger than this are rejected before anything touches the disk
    "max_upload_bytes": 20 * 1024 * 1024,  # 20 MB
    "allowed_extensions": {"jpeg", "jpg", "png", "gif", "webp"},
    # Backups kept per document file, newest first
    "backup_keep": 10,
    # Thumbnail given to freshly created projects until one is uploaded
    "placeholder_thumbnail": "images/placeholder.jpg",
}


def website_root() -> Path:
    """Directory holding the generated pages and the images/ tree."""
    return Path(os.environ.get("CMS_WEBSITE_ROOT") or Path.cwd())


def data_dir() -> Path:
    """Directory holding the JSON documents."""
    configured = os.environ.get("CMS_DATA_DIR")
    if configured:
        return Path(configured)
    return website_root() / "cms" / "data"


def projects_data_dir() -> Path:
    return data_dir() / "projects"


def backup_dir() -> Path:
    return data_dir() / "backups"


def templates_dir() -> Path:
    return Path(os.environ.get("CMS_TEMPLATES_DIR") or _CODE_DIR / "templates")


def admin_dir() -> Path:
    return Path(os.environ.get("CMS_ADMIN_DIR") or _CODE_DIR / "admin")


def error_log_path() -> Path:
    return Path(os.environ.get("CMS_ERROR_LOG", "last_error.log"))


def server_port() -> int:
    return int(os.environ.get("PORT", SITE_CONFIG["port"]))
