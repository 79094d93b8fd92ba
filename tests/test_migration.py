"""Tests for the one-time legacy HTML → JSON migration."""

from __future__ import annotations

import typing as typ

import pytest

import data_manager
import generator
import migration

if typ.TYPE_CHECKING:
    from pathlib import Path

LEGACY_INDEX = """
<body>
<div class="sidebar">
  <div class="sidebar-header">
    <h1>Example Architecture</h1>
    <a href="projects.html">Projects</a>
    <a href="index.html#about">About</a>
  </div>
  <div class="sidebar-content">
    <p>We design <a href="projects.html">homes</a> and studios.</p>
    <p class="contact-email"><a href="mailto:studio@example.com">studio@example.com</a></p>
    <p class="contact-address">1 Main Street<br>Springfield</p>
    <p><iframe src="https://www.google.com/maps/embed?pb=123"></iframe></p>
    <p class="copyright">&copy; 2024</p>
  </div>
</div>
<div class="slideshow">
  <div class="slide active" data-project="harbour-house">
    <img src="images/slideshow/harbour.jpg" alt="Harbour House">
  </div>
  <div class="slide light">
    <img src="images/slideshow/loft.jpg" alt="Canal Loft">
  </div>
</div>
</body>
"""

LEGACY_PROJECTS = """
<main class="project-grid">
  <a href="projects/harbour-house.html" class="project-card">
    <img src="images/harbour-thumb.jpg" alt="Harbour House">
    <div class="project-info">
      <h3>Harbour House</h3>
      <p>Renovation</p>
    </div>
  </a>
  <a href="projects/canal-loft.html" class="project-card">
    <img loading="lazy" src="images/loft-thumb.jpg" alt="Canal Loft">
    <div class="project-info">
      <h3>Canal Loft</h3>
    </div>
  </a>
</main>
"""

LEGACY_PROJECT = """
<header><span class="project-name">Harbour House</span></header>
<div class="slide active">
  <img src="../images/harbour-house/deck.jpg" alt="Deck">
</div>
<div class="slide">
  <img src="../images/harbour-house/kitchen.jpg" alt="Kitchen">
</div>
<div class="slide info-slide">
  <div class="slide-text">
    <span>Completed 2023</span>
    <span>Photography: <em>J. Doe</em></span>
    <span>   </span>
  </div>
</div>
"""


def test_extract_homepage_slides() -> None:
    slides = migration.extract_homepage(LEGACY_INDEX)["slides"]
    assert slides == [
        {"id": 1, "image": "images/slideshow/harbour.jpg", "name": "Harbour House",
         "projectLink": "harbour-house", "isLight": False},
        {"id": 2, "image": "images/slideshow/loft.jpg", "name": "Canal Loft",
         "projectLink": None, "isLight": True},
    ]


def test_extract_sidebar() -> None:
    sidebar = migration.extract_sidebar(LEGACY_INDEX)
    assert sidebar == {
        "companyName": "Example Architecture",
        "email": "studio@example.com",
        "address": "1 Main Street\nSpringfield",
        "mapUrl": "https://www.google.com/maps/embed?pb=123",
        "links": [
            {"text": "Projects", "url": "projects.html"},
            {"text": "About", "url": "index.html#about"},
        ],
        "paragraphs": ["We design [homes](projects.html) and studios."],
    }


def test_extract_sidebar_without_markup() -> None:
    assert migration.extract_sidebar("<html></html>")["paragraphs"] == []


def test_extract_projects_index() -> None:
    assert migration.extract_projects_index(LEGACY_PROJECTS) == {"projects": [
        {"slug": "harbour-house", "thumbnail": "images/harbour-thumb.jpg",
         "title": "Harbour House", "subtitle": "Renovation"},
        {"slug": "canal-loft", "thumbnail": "images/loft-thumb.jpg",
         "title": "Canal Loft", "subtitle": None},
    ]}


def test_extract_project() -> None:
    assert migration.extract_project("harbour-house", LEGACY_PROJECT) == {
        "slug": "harbour-house",
        "title": "Harbour House",
        "images": [
            {"src": "../images/harbour-house/deck.jpg", "alt": "Deck"},
            {"src": "../images/harbour-house/kitchen.jpg", "alt": "Kitchen"},
        ],
        "info": ["Completed 2023", "Photography: J. Doe"],
    }


def test_extract_project_falls_back_to_slug_title() -> None:
    assert migration.extract_project("untitled", "<p>nothing</p>")["title"] == "untitled"


def _legacy_site(root: Path) -> None:
    (root / "index.html").write_text(LEGACY_INDEX, encoding="utf-8")
    (root / "projects.html").write_text(LEGACY_PROJECTS, encoding="utf-8")
    (root / "projects").mkdir()
    (root / "projects" / "harbour-house.html").write_text(LEGACY_PROJECT, encoding="utf-8")
    (root / "projects" / "old copy.html").write_text(LEGACY_PROJECT, encoding="utf-8")


def test_migrate_writes_documents(site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _legacy_site(site)

    counts = migration.migrate(site)

    assert counts == {"slides": 2, "projects": 2, "pages": 1}
    assert data_manager.get_homepage()["sidebar"]["companyName"] == "Example Architecture"
    assert [p["slug"] for p in data_manager.get_projects_index()["projects"]] == [
        "harbour-house",
        "canal-loft",
    ]
    assert data_manager.get_project("harbour-house")["info"] == ["Completed 2023", "Photography: J. Doe"]
    assert "Skipping old copy.html" in capsys.readouterr().out


def test_migrate_requires_legacy_pages(site: Path) -> None:
    with pytest.raises(FileNotFoundError):
        migration.migrate(site)


LEGACY_ENTITIES = """
<div class="sidebar-header">
  <h1>Smith &amp; Co</h1>
  <a href="index.html#about">About &amp; Contact</a>
</div>
<div class="sidebar-content">
  <p>Design &amp; <em>build</em> by <a href="projects.html?a=1&amp;b=2">our <strong>team</strong></a>.</p>
  <p class="copyright">&copy; 2024</p>
</div>
"""


def test_extract_sidebar_decodes_entities_and_drops_inline_tags() -> None:
    sidebar = migration.extract_sidebar(LEGACY_ENTITIES)

    assert sidebar["companyName"] == "Smith & Co"
    assert sidebar["links"] == [{"text": "About & Contact", "url": "index.html#about"}]
    assert sidebar["paragraphs"] == ["Design & build by [our team](projects.html?a=1&b=2)."]


def test_migrated_text_is_escaped_once_when_regenerated(site: Path) -> None:
    (site / "index.html").write_text(LEGACY_ENTITIES, encoding="utf-8")
    (site / "projects.html").write_text(LEGACY_PROJECTS, encoding="utf-8")
    migration.migrate(site)

    generator.generate_homepage()

    page = (site / "index.html").read_text(encoding="utf-8")
    assert "<h1>Smith &amp; Co</h1>" in page
    assert "Design &amp; build by" in page
    assert "&amp;amp;" not in page
    assert "&lt;em&gt;" not in page
