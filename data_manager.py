"""
JSON document store for the site content.

Every save validates the document against its model, copies the previous
file into backups/ and then overwrites it. Missing documents read as empty
defaults (or None for a single project).
"""
import json
import re
import shutil
from datetime import datetime
from pathlib import Path

import site_config
from models import Homepage, Project, ProjectSummary, ProjectsIndex, Sidebar, dump

HOMEPAGE_FILE       = "homepage.json"
PROJECTS_INDEX_FILE = "projects-index.json"

_SLUG_SAFE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


# ── Low-level file helpers ────────────────────────────────────────────────────

def _backup_target(path: Path) -> Path:
    """Backup folder for ``path``, mirroring its location under the data dir."""
    try:
        relative_parent = path.parent.resolve().relative_to(site_config.data_dir().resolve())
    except ValueError:
        relative_parent = Path()
    return site_config.backup_dir() / relative_parent


def list_backups(path: Path) -> list[Path]:
    """Backups of one document file, newest first."""
    folder = _backup_target(path)
    if not folder.is_dir():
        return []
    backups = [
        entry for entry in folder.iterdir()
        if entry.is_file() and "_" in entry.name and entry.name.split("_", 1)[1] == path.name
    ]
    return sorted(backups, key=lambda p: p.name, reverse=True)


def create_backup(path: Path) -> Path | None:
    """Copy ``path`` into the backup folder and prune old copies of it."""
    if not path.exists():
        return None

    folder = _backup_target(path)
    folder.mkdir(parents=True, exist_ok=True)
    stamp       = datetime.now().strftime("%Y%m%dT%H%M%S%f")
    backup_path = folder / f"{stamp}_{path.name}"
    shutil.copy2(path, backup_path)

    for old in list_backups(path)[site_config.SITE_CONFIG["backup_keep"]:]:
        old.unlink()
    return backup_path


def read_json(path: Path):
    if not path.exists():
        return None
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path, data) -> None:
    create_backup(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def is_valid_slug(slug) -> bool:
    """Slugs double as file names, so only plain word characters and hyphens pass."""
    return isinstance(slug, str) and bool(_SLUG_SAFE.match(slug))


def _project_path(slug: str) -> Path:
    if not is_valid_slug(slug):
        raise ValueError(f"Invalid project slug: {slug!r}")
    return site_config.projects_data_dir() / f"{slug}.json"


# ── Homepage + sidebar ────────────────────────────────────────────────────────

def get_homepage() -> dict:
    data = read_json(site_config.data_dir() / HOMEPAGE_FILE)
    return {"slides": [], "sidebar": {}} if data is None else data


def save_homepage(data: dict) -> None:
    Homepage.model_validate(data)
    write_json(site_config.data_dir() / HOMEPAGE_FILE, data)


def get_sidebar() -> dict:
    sidebar = get_homepage().get("sidebar")
    return {} if sidebar is None else sidebar


def save_sidebar(data: dict) -> None:
    """Replace the sidebar embedded in the homepage document."""
    Sidebar.model_validate(data)
    homepage = get_homepage()
    homepage["sidebar"] = data
    save_homepage(homepage)


# ── Projects ──────────────────────────────────────────────────────────────────

def get_projects_index() -> dict:
    data = read_json(site_config.data_dir() / PROJECTS_INDEX_FILE)
    return {"projects": []} if data is None else data


def save_projects_index(data: dict) -> None:
    index = ProjectsIndex.model_validate(data)
    slugs = [p.slug for p in index.projects]
    duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
    if duplicates:
        raise ValueError(f"Duplicate project slug(s): {', '.join(duplicates)}")
    write_json(site_config.data_dir() / PROJECTS_INDEX_FILE, data)


def get_project(slug: str) -> dict | None:
    """The project document, or None when there is none (unusable slugs included)."""
    if not is_valid_slug(slug):
        return None
    return read_json(_project_path(slug))


def save_project(slug: str, data: dict) -> None:
    path    = _project_path(slug)
    project = Project.model_validate(data)
    if project.slug != slug:
        raise ValueError(f"Project slug mismatch: document says {project.slug!r}, expected {slug!r}")
    write_json(path, data)


def delete_project(slug: str) -> None:
    """Remove a project document, keeping one last backup of it."""
    path = _project_path(slug)
    if path.exists():
        create_backup(path)
        path.unlink()


def slugify(title: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def create_project(title: str, subtitle: str | None = None) -> str:
    """Add a project to the index, create its empty document and return its slug."""
    slug = slugify(title or "")
    if not slug:
        raise ValueError("A project title with at least one letter or digit is required")

    index = get_projects_index()
    if any(p.get("slug") == slug for p in index["projects"]):
        raise ValueError(f"A project with slug '{slug}' already exists")

    index["projects"].append(dump(ProjectSummary(
        slug=slug,
        thumbnail=site_config.SITE_CONFIG["placeholder_thumbnail"],
        title=title,
        subtitle=subtitle or None,
    )))
    save_projects_index(index)
    save_project(slug, {"slug": slug, "title": title, "images": [], "info": []})
    return slug


def remove_project(slug: str) -> None:
    """Drop a project from the index, then delete its document."""
    _project_path(slug)
    index = get_projects_index()
    index["projects"] = [p for p in index["projects"] if p.get("slug") != slug]
    save_projects_index(index)
    delete_project(slug)
