"""
Static page generator.

Reads the current JSON documents, renders them through the Jinja2 templates
and overwrites the matching HTML files under the website root. Every call is
a full rebuild of the page(s) it names.
"""
import re
import sys
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template
from markupsafe import Markup, escape

import data_manager
import site_config
from models import Homepage, Project, ProjectsIndex

_MD_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


# ── Template filters ─────────────────────────────────────────────────────────

def markdown_links(text) -> Markup:
    """Turn ``[text](url)`` into links that open in a new tab; everything else is escaped."""
    if not text:
        return Markup("")
    return Markup(_MD_LINK.sub(r'<a href="\2" target="_blank">\1</a>', str(escape(text))))


def newline_to_br(text) -> Markup:
    if not text:
        return Markup("")
    return Markup(str(escape(text)).replace("\n", "<br>"))


@lru_cache(maxsize=None)
def _environment(templates_dir: str) -> Environment:
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["markdown_links"] = markdown_links
    env.filters["newline_to_br"] = newline_to_br
    return env


def load_template(name: str) -> Template:
    """Compiled template from the configured templates folder (compiled once, then cached)."""
    return _environment(str(site_config.templates_dir())).get_template(f"{name}.html.j2")


def _write(relative: str, html: str) -> Path:
    output_path = site_config.website_root() / relative
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if not html.endswith("\n"):
        html += "\n"
    output_path.write_text(html, encoding="utf-8")
    print(f"Generated: {relative}")
    return output_path


# ── Pages ─────────────────────────────────────────────────────────────────────

def generate_homepage() -> Path:
    homepage = Homepage.model_validate(data_manager.get_homepage())
    html = load_template("index").render(
        asset_prefix="",
        slides=homepage.slides,
        sidebar=homepage.sidebar,
        project_names=[s.name for s in homepage.slides],
    )
    return _write("index.html", html)


def generate_projects_index() -> Path:
    index = ProjectsIndex.model_validate(data_manager.get_projects_index())
    html  = load_template("projects").render(asset_prefix="", projects=index.projects)
    return _write("projects.html", html)


def generate_project_page(slug: str) -> Path | None:
    """Render projects/<slug>.html; a project without a document is reported and skipped."""
    data = data_manager.get_project(slug)
    if data is None:
        print(f"Project not found: {slug}", file=sys.stderr)
        return None

    project     = Project.model_validate(data)
    image_count = len(project.images)
    has_info    = bool(project.info)
    html = load_template("project-detail").render(
        asset_prefix="../",
        project=project,
        image_count=image_count,
        total_slides=image_count + 1 if has_info else image_count,
        has_info=has_info,
    )
    return _write(f"projects/{slug}.html", html)


def generate_all_project_pages() -> list[Path]:
    written = []
    for project in data_manager.get_projects_index().get("projects", []):
        slug = project.get("slug")
        try:
            path = generate_project_page(slug)
        except Exception as e:
            print(f"Error generating {slug}: {e}", file=sys.stderr)
            continue
        if path is not None:
            written.append(path)
    return written


def generate_all() -> list[Path]:
    print("Regenerating all HTML files...")
    written = [generate_homepage(), generate_projects_index()]
    written.extend(generate_all_project_pages())
    print("Generation complete!")
    return written


def remove_project_page(slug: str) -> None:
    """Delete the generated page of a project that no longer exists."""
    if not data_manager.is_valid_slug(slug):
        raise ValueError(f"Invalid project slug: {slug!r}")
    page = site_config.website_root() / "projects" / f"{slug}.html"
    if page.exists():
        page.unlink()
        print(f"Removed: projects/{slug}.html")
