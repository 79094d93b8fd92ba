"""Shared fixtures: every test runs against a throwaway website checkout."""

from __future__ import annotations

import copy
import io
import typing as typ

import pytest
from PIL import Image

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CMS at an empty website root under ``tmp_path``."""
    root = tmp_path / "site"
    root.mkdir()
    monkeypatch.setenv("CMS_WEBSITE_ROOT", str(root))
    monkeypatch.setenv("CMS_ERROR_LOG", str(tmp_path / "last_error.log"))
    for name in ("CMS_DATA_DIR", "CMS_TEMPLATES_DIR", "CMS_ADMIN_DIR"):
        monkeypatch.delenv(name, raising=False)
    return root


@pytest.fixture
def client(site: Path):
    from app import app

    app.config["TESTING"] = True
    return app.test_client()


def image_bytes(size: tuple[int, int] = (64, 48), fmt: str = "PNG", color: str = "teal") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    return image_bytes


SAMPLE_HOMEPAGE: dict[str, typ.Any] = {
    "slides": [
        {"id": 1, "image": "images/slideshow/harbour.jpg", "name": "Harbour House",
         "projectLink": "harbour-house", "isLight": False},
        {"id": 2, "image": "images/slideshow/loft.jpg", "name": "Canal Loft",
         "projectLink": None, "isLight": True},
    ],
    "sidebar": {
        "companyName": "Example Architecture",
        "email": "studio@example.com",
        "address": "1 Main Street\nSpringfield",
        "mapUrl": "https://maps.example.com/embed?q=studio",
        "links": [{"text": "Projects", "url": "projects.html"}],
        "paragraphs": ["We design homes. See [our work](projects.html)."],
    },
}


@pytest.fixture
def sample_homepage() -> dict[str, typ.Any]:
    return copy.deepcopy(SAMPLE_HOMEPAGE)
